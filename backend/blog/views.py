import pathlib
from enum import Enum
import jinja2
import structlog
from fastapi import Request
from fastapi.responses import HTMLResponse
from .auth import current_username
from .errors import RenderError

logger = structlog.get_logger(__name__)

TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"

class View(str, Enum):
    HOME = "home.html"
    ARTICLES = "articles.html"
    ARTICLE = "article.html"
    ARTICLE_FORM = "article_form.html"
    REGISTER = "register.html"
    LOGIN = "login.html"

class Views:
    """Every View compiled up front, so a missing or broken template fails
    application startup instead of a request."""

    def __init__(self, directory: str | pathlib.Path | None = None):
        self.directory = pathlib.Path(directory) if directory else TEMPLATE_DIR
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.directory)),
            autoescape=True,
        )
        self._compiled = {view: self.env.get_template(view.value) for view in View}

    def render(self, request: Request, view: View, status_code: int = 200, **context) -> HTMLResponse:
        context.setdefault("current_user", current_username(request))
        try:
            html = self._compiled[view].render(**context)
        except jinja2.TemplateError as e:
            logger.error("Template render failed", view=view.value, error=str(e))
            raise RenderError() from e
        return HTMLResponse(html, status_code=status_code)

def get_views(request: Request) -> Views:
    return request.app.state.views
