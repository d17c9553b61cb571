"""
Feed data models.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Union


@dataclass
class ArticleImage:
    url: str
    alt_text: Optional[str] = None


@dataclass
class Article:
    """Blog article as returned by the Storefront API."""
    id: str
    title: str
    handle: str
    blog_handle: str
    content: str = ''
    content_html: str = ''
    excerpt: Optional[str] = None
    published_at: Optional[str] = None  # ISO-8601
    image: Optional[ArticleImage] = None
    author_name: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> 'Article':
        image = node.get('image') or None
        blog = node.get('blog') or {}
        author = node.get('author') or {}
        return cls(
            id=node.get('id', ''),
            title=node.get('title', ''),
            handle=node.get('handle', ''),
            blog_handle=blog.get('handle', ''),
            content=node.get('content') or '',
            content_html=node.get('contentHtml') or '',
            excerpt=node.get('excerpt'),
            published_at=node.get('publishedAt'),
            image=ArticleImage(url=image['url'], alt_text=image.get('altText')) if image and image.get('url') else None,
            author_name=author.get('name'),
            tags=list(node.get('tags') or []),
        )


@dataclass
class Page:
    """CMS page as returned by the Storefront API."""
    id: str
    title: str
    handle: str
    body: str = ''
    body_summary: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> 'Page':
        return cls(
            id=node.get('id', ''),
            title=node.get('title', ''),
            handle=node.get('handle', ''),
            body=node.get('body') or '',
            body_summary=node.get('bodySummary'),
            created_at=node.get('createdAt'),
            updated_at=node.get('updatedAt'),
        )


@dataclass(frozen=True)
class ImageReference:
    """MediaImage reference."""
    url: Optional[str]
    alt_text: Optional[str] = None


@dataclass(frozen=True)
class FileReference:
    """GenericFile reference."""
    url: Optional[str]
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class MetaobjectLink:
    """Reference to another metaobject."""
    id: str
    handle: Optional[str] = None


FieldReference = Union[ImageReference, FileReference, MetaobjectLink]


def parse_reference(ref: Optional[Dict[str, Any]]) -> Optional[FieldReference]:
    """Pick the reference variant from the shape of the GraphQL object."""
    if not ref:
        return None
    if 'image' in ref:
        image = ref.get('image') or {}
        return ImageReference(url=image.get('url'), alt_text=image.get('altText'))
    if 'url' in ref or 'mimeType' in ref:
        return FileReference(url=ref.get('url'), mime_type=ref.get('mimeType'))
    if 'id' in ref:
        return MetaobjectLink(id=ref['id'], handle=ref.get('handle'))
    return None


@dataclass
class MetaobjectField:
    key: str
    value: Optional[str] = None
    reference: Optional[FieldReference] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> 'MetaobjectField':
        return cls(
            key=node.get('key', ''),
            value=node.get('value'),
            reference=parse_reference(node.get('reference')),
        )


@dataclass
class Metaobject:
    """Typed, schema-flexible record (exhibitor, show, ...)."""
    id: str
    handle: str
    type: str
    updated_at: Optional[str] = None
    fields: List[MetaobjectField] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> 'Metaobject':
        return cls(
            id=node.get('id', ''),
            handle=node.get('handle', ''),
            type=node.get('type', ''),
            updated_at=node.get('updatedAt'),
            fields=[MetaobjectField.from_node(f) for f in node.get('fields') or []],
        )


@dataclass(frozen=True)
class NormalizedItem:
    """Normalized feed item built from a metaobject."""
    id: str  # {type}_{handle}
    title: str
    description: str  # Plain text, not yet cleaned
    link: str
    image_url: Optional[str]
    updated_at: Optional[str]
    type: str


@dataclass(frozen=True)
class MetaobjectFeed:
    """Static description of one metaobject feed."""
    api_type: str  # Type string sent to the API
    type: str  # Tag used for ids, links and g:type
    label: str
    path_segment: str
    filename: str
    noun: str  # Used in the run report
