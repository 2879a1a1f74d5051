from pydantic import BaseModel, ConfigDict
from datetime import datetime

class ArticleIn(BaseModel):
    title: str = ""
    content: str = ""
    author: str = ""

class ArticleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author: str
    created_at: datetime
    comment_count: int
