"""Transcoding template catalog models."""

from __future__ import annotations

from pydantic import BaseModel, Field

REMUX_CONTAINER = "mp4"
REMUX_CODEC = "copy"
DEPRECATED_MARKER = "Deprecated"


class TemplateDescriptor(BaseModel):
    """A transcoding template as reported by the cloud catalog."""

    id: int
    name: str
    container: str
    video_codec: str = ""
    audio_codec: str = ""
    definition_tier: str = ""
    comment: str = ""
    update_time: str = ""

    @property
    def is_deprecated(self) -> bool:
        return DEPRECATED_MARKER in self.name

    @property
    def is_remux(self) -> bool:
        """Repackages media without re-encoding either stream."""
        return (
            self.container == REMUX_CONTAINER
            and self.video_codec == REMUX_CODEC
            and self.audio_codec == REMUX_CODEC
        )


class TemplateFilter(BaseModel):
    """Fixed discovery filter: preset video templates, first page."""

    type: str = "Preset"
    container_type: str = "Video"
    limit: int = 100
    offset: int = 0
    tehd_type: str = "Common"


class TemplatePage(BaseModel):
    """One page of the catalog lookup."""

    total_count: int = 0
    templates: list[TemplateDescriptor] = Field(default_factory=list)


class TemplateCatalog(BaseModel):
    """Filtered template list persisted under the ``transcode`` checkpoint."""

    nn: int = 0
    templates: list[TemplateDescriptor] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: TemplatePage) -> TemplateCatalog:
        templates = [t for t in page.templates if not t.is_deprecated]
        return cls(nn=len(templates), templates=templates)

    def first_remux(self) -> TemplateDescriptor | None:
        return next((t for t in self.templates if t.is_remux), None)


class RemuxSelection(BaseModel):
    """Selected remux template persisted under the ``remux`` checkpoint.

    ``template`` is None when the catalog holds no remux template; the
    selection is still recorded so the step counts as done.
    """

    template: TemplateDescriptor | None = None
