"""
GraphQL Query Definitions — Default Storefront API documents per entity family.

Every paginated query accepts $first and $after and exposes the connection at
its root field together with pageInfo.hasNextPage and a cursor per edge; the
paginator relies on that convention. Nested connections (variants, images,
products, comments) are requested with a fixed first: 250 and are not
paginated further.

The shop queries (SHOP_POLICIES_QUERY, SHOP_DETAILS_QUERY) are single-object
queries issued once per locale.

Any of these can be replaced via SHOPIFY_QUERIES_FILE, keyed by the family's
endpoint name (see DEFAULT_QUERIES).
"""

IMAGE_FIELDS = """
    id
    altText
    url
    width
    height
"""

COLLECTIONS_QUERY = f"""
query GetCollections($first: Int!, $after: String) {{
  collections(first: $first, after: $after) {{
    pageInfo {{
      hasNextPage
    }}
    edges {{
      cursor
      node {{
        id
        handle
        title
        description
        descriptionHtml
        updatedAt
        image {{{IMAGE_FIELDS}}}
        products(first: 250) {{
          edges {{
            node {{
              id
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""

PRODUCTS_QUERY = f"""
query GetProducts($first: Int!, $after: String) {{
  products(first: $first, after: $after) {{
    pageInfo {{
      hasNextPage
    }}
    edges {{
      cursor
      node {{
        id
        handle
        title
        description
        descriptionHtml
        productType
        vendor
        tags
        availableForSale
        createdAt
        updatedAt
        publishedAt
        onlineStoreUrl
        priceRange {{
          minVariantPrice {{ amount currencyCode }}
          maxVariantPrice {{ amount currencyCode }}
        }}
        images(first: 250) {{
          edges {{
            node {{{IMAGE_FIELDS}}}
          }}
        }}
        options {{
          id
          name
          values
        }}
        variants(first: 250) {{
          edges {{
            node {{
              id
              title
              sku
              availableForSale
              requiresShipping
              weight
              weightUnit
              price {{ amount currencyCode }}
              compareAtPrice {{ amount currencyCode }}
              selectedOptions {{ name value }}
              image {{{IMAGE_FIELDS}}}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""

SHOP_POLICIES_QUERY = """
query GetShopPolicies {
  shop {
    privacyPolicy { id body handle title url }
    refundPolicy { id body handle title url }
    shippingPolicy { id body handle title url }
    subscriptionPolicy { id body handle title url }
    termsOfService { id body handle title url }
  }
}
"""

SHOP_DETAILS_QUERY = """
query GetShopDetails {
  shop {
    id
    name
    description
    moneyFormat
    primaryDomain { host url }
    paymentSettings {
      acceptedCardBrands
      countryCode
      currencyCode
      enabledPresentmentCurrencies
    }
  }
}
"""

BLOGS_QUERY = """
query GetBlogs($first: Int!, $after: String) {
  blogs(first: $first, after: $after) {
    pageInfo {
      hasNextPage
    }
    edges {
      cursor
      node {
        id
        handle
        title
        onlineStoreUrl
      }
    }
  }
}
"""

ARTICLES_QUERY = f"""
query GetArticles($first: Int!, $after: String) {{
  articles(first: $first, after: $after) {{
    pageInfo {{
      hasNextPage
    }}
    edges {{
      cursor
      node {{
        id
        handle
        title
        content
        contentHtml
        excerpt
        excerptHtml
        publishedAt
        tags
        onlineStoreUrl
        authorV2 {{ name email bio }}
        blog {{ id }}
        image {{{IMAGE_FIELDS}}}
        comments(first: 250) {{
          edges {{
            node {{
              id
              content
              contentHtml
              author {{ name email }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""

PAGES_QUERY = """
query GetPages($first: Int!, $after: String) {
  pages(first: $first, after: $after) {
    pageInfo {
      hasNextPage
    }
    edges {
      cursor
      node {
        id
        handle
        title
        body
        bodySummary
        createdAt
        updatedAt
        onlineStoreUrl
      }
    }
  }
}
"""

DEFAULT_QUERIES = {
    "articles": ARTICLES_QUERY,
    "blogs": BLOGS_QUERY,
    "collections": COLLECTIONS_QUERY,
    "products": PRODUCTS_QUERY,
    "shopPolicies": SHOP_POLICIES_QUERY,
    "shopDetails": SHOP_DETAILS_QUERY,
    "pages": PAGES_QUERY,
}
