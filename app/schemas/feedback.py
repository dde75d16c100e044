from typing import Optional
from pydantic import BaseModel, Field, field_validator


class FeedbackRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    subject: Optional[str] = Field(None, max_length=200)
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("subject")
    @classmethod
    def single_line_subject(cls, v: Optional[str]) -> Optional[str]:
        # ends up in a mail header
        if v is not None and ("\r" in v or "\n" in v):
            raise ValueError("Subject must be a single line")
        return v
