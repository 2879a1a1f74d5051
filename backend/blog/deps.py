import json
from typing import Annotated
from fastapi import Depends, Path, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session
from .config import Settings
from .db import get_db
from .errors import BadRequest
from .pagination import MAX_SQL_INT
from .repository import ArticleRepository, UserRepository
from .schemas import ArticleIn

# ids outside the storage INTEGER range are rejected as malformed (400)
ArticleId = Annotated[int, Path(ge=1, le=MAX_SQL_INT)]

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_articles(db: Session = Depends(get_db)) -> ArticleRepository:
    return ArticleRepository(db)

def get_users(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

async def read_article_payload(request: Request) -> ArticleIn:
    """Article fields from a JSON body or from form data."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            data = await request.json()
            if not isinstance(data, dict):
                raise BadRequest()
        else:
            form = await request.form()
            data = {k: v for k, v in form.items() if isinstance(v, str)}
        return ArticleIn.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise BadRequest() from e
