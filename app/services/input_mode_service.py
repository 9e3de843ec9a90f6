from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class FileMode(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    file: Any


class UrlMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class InvalidCombination(BaseModel):
    model_config = ConfigDict(frozen=True)

    supplied: Literal["both", "none"]


InputMode = Union[FileMode, UrlMode, InvalidCombination]


def resolve_mode(file_candidate: Optional[Any], url_candidate: Optional[str]) -> InputMode:
    """Pick the single active source. An empty or blank URL counts as absent."""
    url = (url_candidate or "").strip()
    has_file = file_candidate is not None

    if has_file and url:
        return InvalidCombination(supplied="both")
    if not has_file and not url:
        return InvalidCombination(supplied="none")
    if has_file:
        return FileMode(file=file_candidate)
    return UrlMode(url=url)
