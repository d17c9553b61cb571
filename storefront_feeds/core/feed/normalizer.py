"""
Normalize metaobjects into feed items.

A metaobject is a loose bag of key/value fields. Each feed slot (title,
description, link, image) is filled from the first matching field key, trying
the type-specific hints first, then the generic defaults, then a value derived
from the metaobject itself. New metaobject types only need a new entry in
METAOBJECT_TYPE_HINTS.
"""

from typing import Dict, List, Optional, Sequence

from storefront_feeds.config import DEFAULT_SITE_URL
from .models import Metaobject, MetaobjectField, NormalizedItem, ImageReference, FileReference


METAOBJECT_FIELD_DEFAULTS: Dict[str, List[str]] = {
    'title': ['title', 'name', 'heading'],
    'description': ['description', 'summary', 'bio', 'body'],
    'link': ['link', 'url', 'website', 'cta_url'],
    'image': ['image', 'hero_image', 'poster', 'logo'],
}

METAOBJECT_TYPE_HINTS: Dict[str, Dict[str, List[str]]] = {
    'exhibitor': {
        'title': ['store_name'],
        'description': ['store_description'],
        'link': ['website', 'url', 'link'],
        'image': ['store_logo_thumbnail', 'store_artwork_image_thumbnail'],
    },
    'show': {
        'title': ['title'],
        'description': ['show_description'],
        'link': ['url', 'link'],
        'image': ['show_thumbnail', 'show_banner'],
    },
}


def build_field_lookup(fields: Sequence[MetaobjectField]) -> Dict[str, MetaobjectField]:
    """Map field key to field; a repeated key keeps its last occurrence."""
    return {f.key: f for f in fields}


def get_field_value(lookup: Dict[str, MetaobjectField], keys: Sequence[str]) -> Optional[str]:
    """Return the value of the first key that has a non-None value (empty string counts)."""
    for key in keys:
        f = lookup.get(key)
        if f is not None and f.value is not None:
            return f.value
    return None


def resolve_slot(
    lookup: Dict[str, MetaobjectField],
    key_lists: Sequence[Sequence[str]],
    default: Optional[str] = None
) -> Optional[str]:
    """
    Try each list of candidate keys in turn.

    The first list producing a non-empty value wins. An empty string found in
    one list falls through to the next list, and finally to ``default``.
    """
    for keys in key_lists:
        value = get_field_value(lookup, keys)
        if value:
            return value
    return default


def get_image_url(f: Optional[MetaobjectField]) -> Optional[str]:
    """Extract an image URL from a field's media reference."""
    if f is None or f.reference is None:
        return None
    ref = f.reference

    if isinstance(ref, ImageReference) and ref.url:
        return ref.url

    # GenericFile: only when it is an image
    if isinstance(ref, FileReference) and ref.url and (ref.mime_type or '').startswith('image/'):
        return ref.url

    return None


def default_path_segment(metaobject_type: str) -> str:
    """Pluralize the type name for use as a URL path segment."""
    return metaobject_type if metaobject_type.endswith('s') else f'{metaobject_type}s'


def normalize_metaobject(
    metaobject: Metaobject,
    metaobject_type: str,
    path_segment: Optional[str] = None,
    site_url: str = DEFAULT_SITE_URL
) -> NormalizedItem:
    """
    Convert a metaobject to a NormalizedItem.

    Args:
        metaobject: Metaobject to convert
        metaobject_type: Type tag used for hint lookup, id and link
        path_segment: URL path segment for the default link (e.g. 'pages/shows')
        site_url: Public site base URL

    Returns:
        NormalizedItem
    """
    lookup = build_field_lookup(metaobject.fields)
    hints = METAOBJECT_TYPE_HINTS.get(metaobject_type, {})
    segment = path_segment or default_path_segment(metaobject_type)

    def candidates(slot: str) -> List[List[str]]:
        return [hints.get(slot, []), METAOBJECT_FIELD_DEFAULTS[slot]]

    title = resolve_slot(lookup, candidates('title'), metaobject.handle)
    description = resolve_slot(
        lookup,
        candidates('description'),
        ' '.join(f.value if f.value is not None else '' for f in metaobject.fields)
    )
    link = resolve_slot(
        lookup,
        candidates('link'),
        f"{site_url.rstrip('/')}/{segment}/{metaobject.handle}"
    )

    image_url = None
    for key in hints.get('image', []) + METAOBJECT_FIELD_DEFAULTS['image']:
        image_url = get_image_url(lookup.get(key))
        if image_url:
            break

    return NormalizedItem(
        id=f'{metaobject_type}_{metaobject.handle}',
        title=title,
        description=description,
        link=link,
        image_url=image_url,
        updated_at=metaobject.updated_at,
        type=metaobject_type,
    )
