"""Raw article records as returned by each news provider.

Each provider has its own record shape; the ``provider`` literal tags the
union so the normalizer can pick the matching mapping.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _ProviderRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedSource(_ProviderRecord):
    id: str | None = None
    name: str | None = None
    url: str | None = None


class NewsAPIRecord(_ProviderRecord):
    """Item of ``articles`` in a NewsAPI ``/v2/top-headlines`` response."""

    provider: Literal["newsapi"] = "newsapi"
    title: str | None = None
    description: str | None = None
    content: str | None = None
    url: str | None = None
    url_to_image: str | None = Field(default=None, alias="urlToImage")
    published_at: str | None = Field(default=None, alias="publishedAt")
    author: str | None = None
    source: NamedSource = Field(default_factory=NamedSource)


class GNewsRecord(_ProviderRecord):
    """Item of ``articles`` in a GNews ``/api/v4/top-headlines`` response."""

    provider: Literal["gnews"] = "gnews"
    title: str | None = None
    description: str | None = None
    content: str | None = None
    url: str | None = None
    image: str | None = None
    published_at: str | None = Field(default=None, alias="publishedAt")
    source: NamedSource = Field(default_factory=NamedSource)


class NewsDataRecord(_ProviderRecord):
    """Item of ``results`` in a NewsData.io ``/api/1/latest`` response."""

    provider: Literal["newsdata"] = "newsdata"
    title: str | None = None
    description: str | None = None
    content: str | None = None
    link: str | None = None
    image_url: str | None = None
    pub_date: str | None = Field(default=None, alias="pubDate")
    source_id: str | None = None
    source_name: str | None = None


RawRecord = Annotated[
    Union[NewsAPIRecord, GNewsRecord, NewsDataRecord],
    Field(discriminator="provider"),
]
