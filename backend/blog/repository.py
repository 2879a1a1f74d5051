from __future__ import annotations
from sqlalchemy import select, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from .models import Article, Comment, User
from .errors import UsernameTaken

class ArticleRepository:
    """Article and comment persistence. Lookups return None when the row
    is absent; storage failures propagate."""

    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Article)) or 0

    def list_page(self, offset: int, limit: int) -> list[Article]:
        stmt = (
            select(Article)
            .options(selectinload(Article.comments))
            .order_by(desc(Article.created_at), desc(Article.id))
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def get(self, article_id: int, with_comments: bool = False) -> Article | None:
        stmt = select(Article).where(Article.id == article_id)
        if with_comments:
            stmt = stmt.options(selectinload(Article.comments))
        return self.db.scalars(stmt).first()

    def create(self, title: str, content: str, author: str) -> Article:
        article = Article(title=title, content=content, author=author)
        self.db.add(article)
        self._commit()
        self.db.refresh(article)
        return article

    def update(self, article: Article, **fields) -> Article:
        for name in ("title", "content", "author"):
            if name in fields:
                setattr(article, name, fields[name])
        self._commit()
        self.db.refresh(article)
        return article

    def delete(self, article: Article) -> None:
        # comments go with it through the relationship cascade
        self.db.delete(article)
        self._commit()

    def add_comment(self, article: Article, content: str, author: str) -> Comment:
        comment = Comment(article_id=article.id, content=content, author=author)
        self.db.add(comment)
        self._commit()
        self.db.refresh(comment)
        return comment

    def comments_for(self, article_id: int) -> list[Comment]:
        stmt = select(Comment).where(Comment.article_id == article_id).order_by(Comment.created_at, Comment.id)
        return list(self.db.scalars(stmt).all())

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> User | None:
        return self.db.scalars(select(User).where(User.username == username)).first()

    def create(self, username: str, password_hash: str) -> User:
        user = User(username=username, password=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UsernameTaken() from e
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user
