"""Demo context handed to the avatar model."""

from pydantic import BaseModel as PydanticBaseModel, Field


class DemoVideo(PydanticBaseModel):
    """A demonstration video attached to a demo."""

    title: str = Field(..., min_length=1)
    order_index: int = Field(..., ge=0)


class DemoContext(PydanticBaseModel):
    """Everything the avatar needs to present one product demo."""

    title: str = Field(..., min_length=1, description="Product or demo name")
    knowledge_base: str = Field(default="", description="Knowledge base text")
    videos: list[DemoVideo] = Field(default_factory=list)
    cta_link: str | None = None

    @property
    def ordered_videos(self) -> list[DemoVideo]:
        """Videos sorted by their order index."""
        return sorted(self.videos, key=lambda v: v.order_index)
