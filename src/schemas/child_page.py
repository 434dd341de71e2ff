"""Child page domain object."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ChildPage:
    """Represents one scanned page listed on an Index page.

    Attributes:
        num: Page number taken from the page link, if present
        label: Visible label of the link in the page list
        url: Absolute URL of the page
        quality: Proofreading quality level (0-4), if present
        title: Raw page title taken from the link, if present
    """

    num: str | None
    label: str
    url: str
    quality: int | None = None
    title: str | None = None

    @property
    def key(self) -> str | None:
        """Key of this page within its Index page's list, or None without a num."""
        if self.num is None:
            return None
        return f"page-{self.num}"

    def to_dict(self) -> dict:
        return asdict(self)
