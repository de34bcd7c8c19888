from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ChatData(BaseModel):
    images: Optional[List[str]] = None


class ChatRequest(BaseModel):
    messages: List[Dict[str, Any]] = Field(default_factory=list)
    selectedModel: Optional[str] = None
    data: Optional[ChatData] = None

    @property
    def images(self) -> List[str]:
        if self.data is None or not self.data.images:
            return []
        return self.data.images


class HealthResponse(BaseModel):
    status: str
