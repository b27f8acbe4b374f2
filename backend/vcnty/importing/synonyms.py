# backend/vcnty/importing/synonyms.py

# Canonical item fields every import row is normalized into (in template order)
TARGET_SCHEMA = [
    "title",
    "short_desc",
    "full_description",
    "price",
    "currency",
    "stock_qty",
    "sku",
    "category",
    "tags",
    "main_image_url",
    "status",
]

# Map many messy headers → ONE canonical key.
# Keys are already normalized: lower-case, [a-z0-9] only.
HEADER_ALIASES = {
    # ---- title ----
    "itemname": "title",
    "productname": "title",
    "name": "title",

    # ---- descriptions ----
    "shortdescription": "short_desc",
    "shortdesc": "short_desc",
    "summary": "short_desc",
    "productdescription": "full_description",
    "description": "full_description",
    "longdescription": "full_description",
    "fulldescription": "full_description",

    # ---- price / stock ----
    "cost": "price",
    "amount": "price",
    "stock": "stock_qty",
    "quantity": "stock_qty",
    "qty": "stock_qty",
    "stockqty": "stock_qty",

    # ---- image ----
    "image": "main_image_url",
    "imageurl": "main_image_url",
    "mainimageurl": "main_image_url",
    "photo": "main_image_url",
}

# Headers written into the downloadable template
TEMPLATE_HEADERS = [
    "Title", "Short_Desc", "Full_Description",
    "Price", "Currency", "Stock_Qty",
    "SKU", "Category", "Tags",
    "Main_Image_URL", "Status",
]
