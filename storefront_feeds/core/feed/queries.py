"""
GraphQL documents for the Storefront API.
"""

ARTICLES_PAGE_SIZE = 250
PAGES_PAGE_SIZE = 250
METAOBJECTS_PAGE_SIZE = 100


ARTICLES_QUERY = f"""
  query GetArticles($cursor: String) {{
    articles(first: {ARTICLES_PAGE_SIZE}, after: $cursor) {{
      pageInfo {{
        hasNextPage
        endCursor
      }}
      edges {{
        node {{
          id
          title
          handle
          content
          contentHtml
          excerpt
          publishedAt
          image {{
            url
            altText
          }}
          blog {{
            handle
          }}
          author {{
            name
          }}
          tags
        }}
      }}
    }}
  }}
"""

PAGES_QUERY = f"""
  query GetPages($cursor: String) {{
    pages(first: {PAGES_PAGE_SIZE}, after: $cursor) {{
      pageInfo {{
        hasNextPage
        endCursor
      }}
      edges {{
        node {{
          id
          title
          handle
          body
          bodySummary
          createdAt
          updatedAt
        }}
      }}
    }}
  }}
"""

METAOBJECTS_QUERY = f"""
  query GetMetaobjects($type: String!, $cursor: String) {{
    metaobjects(first: {METAOBJECTS_PAGE_SIZE}, type: $type, after: $cursor) {{
      pageInfo {{
        hasNextPage
        endCursor
      }}
      edges {{
        node {{
          id
          handle
          type
          updatedAt
          fields {{
            key
            value
            reference {{
              ... on MediaImage {{
                image {{
                  url
                  altText
                }}
              }}
              ... on GenericFile {{
                url
                mimeType
              }}
              ... on Metaobject {{
                id
                handle
              }}
            }}
          }}
        }}
      }}
    }}
  }}
"""
