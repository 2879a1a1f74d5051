from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
import structlog
from .config import Settings
from .deps import ArticleId, get_articles, get_settings, read_article_payload
from .pages import get_article_or_404, list_articles
from .pagination import parse_page, parse_page_size
from .ratelimit import limiter, write_limit
from .repository import ArticleRepository
from .schemas import ArticleIn
from .views import View, Views, get_views

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])

@router.get("")
def articles_index(
    request: Request,
    page: str | None = None,
    page_size: str | None = None,
    articles: ArticleRepository = Depends(get_articles),
    views: Views = Depends(get_views),
    settings: Settings = Depends(get_settings),
):
    size = parse_page_size(page_size, settings.PAGE_SIZE, settings.MAX_PAGE_SIZE)
    items, pagination = list_articles(articles, parse_page(page), size)
    return views.render(request, View.ARTICLES, articles=items, pagination=pagination)

@router.get("/{article_id}")
def show_article(
    request: Request,
    article_id: ArticleId,
    articles: ArticleRepository = Depends(get_articles),
    views: Views = Depends(get_views),
):
    article = get_article_or_404(articles, article_id, with_comments=True)
    return views.render(request, View.ARTICLE, article=article)

@router.post("")
@limiter.limit(write_limit)
def create_article(
    request: Request,
    payload: ArticleIn = Depends(read_article_payload),
    articles: ArticleRepository = Depends(get_articles),
):
    article = articles.create(payload.title, payload.content, payload.author)
    logger.info("Article created", article_id=article.id)
    return PlainTextResponse("Article created successfully", status_code=status.HTTP_201_CREATED)

@router.put("/{article_id}")
@limiter.limit(write_limit)
def update_article(
    request: Request,
    article_id: ArticleId,
    payload: ArticleIn = Depends(read_article_payload),
    articles: ArticleRepository = Depends(get_articles),
):
    article = get_article_or_404(articles, article_id)
    articles.update(article, **payload.model_dump(exclude_unset=True))
    logger.info("Article updated", article_id=article.id)
    return PlainTextResponse("Article updated successfully")

@router.delete("/{article_id}")
@limiter.limit(write_limit)
def delete_article(
    request: Request,
    article_id: ArticleId,
    articles: ArticleRepository = Depends(get_articles),
):
    article = get_article_or_404(articles, article_id)
    articles.delete(article)
    logger.info("Article deleted", article_id=article_id)
    return PlainTextResponse("Article deleted successfully")
