"""
Constants — Entity family names, family groups and endpoint mapping.

Family names double as the suffix of each node's internal type
(TYPE_PREFIX + family, e.g. "ShopifyProduct"). NODE_TO_ENDPOINT_MAPPING maps a
family to the root field of its GraphQL response, which is also the key used
for query overrides.
"""

TYPE_PREFIX = "Shopify"

# Family groups selectable via INCLUDE_COLLECTIONS
SHOP = "shop"
CONTENT = "content"
FAMILY_GROUPS = (SHOP, CONTENT)

# Entity families
ARTICLE = "Article"
BLOG = "Blog"
COLLECTION = "Collection"
COMMENT = "Comment"
PRODUCT = "Product"
PRODUCT_OPTION = "ProductOption"
PRODUCT_VARIANT = "ProductVariant"
SHOP_POLICY = "ShopPolicy"
SHOP_DETAILS = "ShopDetails"
PAGE = "Page"

NODE_TO_ENDPOINT_MAPPING = {
    ARTICLE: "articles",
    BLOG: "blogs",
    COLLECTION: "collections",
    PRODUCT: "products",
    SHOP_POLICY: "shopPolicies",
    SHOP_DETAILS: "shopDetails",
    PAGE: "pages",
}

LOCALE_SEPARATOR = "__"
