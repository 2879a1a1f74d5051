from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
import structlog
from .auth import current_username, end_session, require_login, start_session
from .config import Settings
from .deps import ArticleId, get_articles, get_settings, get_users
from .errors import InvalidCredentials, NotFound
from .pagination import Pagination, paginate, parse_page
from .ratelimit import limiter, auth_limit, write_limit
from .repository import ArticleRepository, UserRepository
from .schemas import ArticleOut
from .security import hash_password, verify_password
from .views import View, Views, get_views

logger = structlog.get_logger(__name__)

router = APIRouter()

def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)

def list_articles(articles: ArticleRepository, page: int, page_size: int) -> tuple[list[ArticleOut], Pagination]:
    pagination = paginate(page, articles.count(), page_size)
    if pagination.beyond_storage:
        return [], pagination
    items = articles.list_page(pagination.offset, pagination.page_size)
    return [ArticleOut.model_validate(a) for a in items], pagination

def get_article_or_404(articles: ArticleRepository, article_id: int, with_comments: bool = False):
    article = articles.get(article_id, with_comments=with_comments)
    if article is None:
        raise NotFound()
    return article

@router.get("/")
def home(
    request: Request,
    page: str | None = None,
    articles: ArticleRepository = Depends(get_articles),
    views: Views = Depends(get_views),
    settings: Settings = Depends(get_settings),
):
    items, pagination = list_articles(articles, parse_page(page), settings.PAGE_SIZE)
    return views.render(request, View.HOME, articles=items, pagination=pagination)

# ---- authoring (login required) ----

@router.get("/new-article", dependencies=[Depends(require_login)])
def new_article_form(request: Request, views: Views = Depends(get_views)):
    return views.render(request, View.ARTICLE_FORM, article=None, action="/new-article")

@router.post("/new-article", dependencies=[Depends(require_login)])
@limiter.limit(write_limit)
def new_article(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    author: str = Form(""),
    articles: ArticleRepository = Depends(get_articles),
):
    article = articles.create(title, content, author or current_username(request) or "")
    logger.info("Article created", article_id=article.id, username=current_username(request))
    return redirect("/")

@router.get("/edit-article/{article_id}", dependencies=[Depends(require_login)])
def edit_article_form(
    request: Request,
    article_id: ArticleId,
    articles: ArticleRepository = Depends(get_articles),
    views: Views = Depends(get_views),
):
    article = get_article_or_404(articles, article_id)
    return views.render(request, View.ARTICLE_FORM, article=article, action=f"/edit-article/{article.id}")

@router.post("/edit-article/{article_id}", dependencies=[Depends(require_login)])
@limiter.limit(write_limit)
def edit_article(
    request: Request,
    article_id: ArticleId,
    title: str = Form(""),
    content: str = Form(""),
    author: str = Form(""),
    articles: ArticleRepository = Depends(get_articles),
):
    article = get_article_or_404(articles, article_id)
    articles.update(article, title=title, content=content, author=author or article.author)
    logger.info("Article updated", article_id=article.id, username=current_username(request))
    return redirect(f"/articles/{article.id}")

@router.post("/delete-article/{article_id}", dependencies=[Depends(require_login)])
@limiter.limit(write_limit)
def delete_article(
    request: Request,
    article_id: ArticleId,
    articles: ArticleRepository = Depends(get_articles),
):
    article = get_article_or_404(articles, article_id)
    articles.delete(article)
    logger.info("Article deleted", article_id=article_id, username=current_username(request))
    return redirect("/")

# ---- comments ----

@router.post("/new-comment/{article_id}")
@limiter.limit(write_limit)
def new_comment(
    request: Request,
    article_id: ArticleId,
    content: str = Form(""),
    author: str = Form(""),
    articles: ArticleRepository = Depends(get_articles),
):
    article = get_article_or_404(articles, article_id)
    comment = articles.add_comment(article, content, author or current_username(request) or "anonymous")
    logger.info("Comment created", article_id=article.id, comment_id=comment.id)
    return redirect(f"/articles/{article.id}")

# ---- accounts ----

@router.get("/register")
def register_form(request: Request, views: Views = Depends(get_views)):
    return views.render(request, View.REGISTER)

@router.post("/register")
@limiter.limit(auth_limit)
def register(
    request: Request,
    username: str = Form(..., min_length=1),
    password: str = Form(..., min_length=1),
    users: UserRepository = Depends(get_users),
    settings: Settings = Depends(get_settings),
):
    hashed = hash_password(password, rounds=settings.BCRYPT_ROUNDS)
    user = users.create(username, hashed)
    logger.info("User registered", user_id=user.id, username=user.username)
    return redirect("/")

@router.get("/login")
def login_form(request: Request, views: Views = Depends(get_views)):
    return views.render(request, View.LOGIN)

@router.post("/login")
@limiter.limit(auth_limit)
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    users: UserRepository = Depends(get_users),
):
    user = users.get_by_username(username)
    if user is None or not verify_password(password, user.password):
        logger.info("Login rejected", username=username)
        raise InvalidCredentials()
    start_session(request, user.username)
    logger.info("User logged in", username=user.username)
    return redirect("/")

@router.get("/logout")
def logout(request: Request):
    username = current_username(request)
    end_session(request)
    logger.info("User logged out", username=username)
    return redirect("/")
