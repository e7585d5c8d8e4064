import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel


class BaseModel(SQLModel, table=False):
    """Common columns: a random UUID key and naive local timestamps."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.now, index=True)
    updated_at: datetime = Field(default_factory=datetime.now)
