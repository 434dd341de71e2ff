"""Index page metadata schema."""

from pydantic import BaseModel, ConfigDict, Field


class IndexPageInfo(BaseModel):
    """Metadata of an Index page as returned by the MediaWiki info query.

    Attributes:
        page_id: MediaWiki page ID
        ns: Namespace ID of the page
        title: Normalised title (spaces rather than underscores)
        canonical_url: Fully-qualified canonical URL of the page
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    page_id: int = Field(alias="pageid")
    ns: int
    title: str
    canonical_url: str = Field(alias="canonicalurl")
