"""Fixed names shared by the storage backends and the domains."""

# Keys of the two arrays in the local storage file
STORAGE_KEYS = {
    "PRODUCTS": "inventory_products",
    "SALES": "inventory_sales",
}

# Collection names on the remote document store
COLLECTIONS = {
    "PRODUCTS": "products",
    "SALES": "sales",
}

CATEGORIES = [
    "T-Shirts",
    "Trousers",
    "Dresses",
    "Jackets",
    "Accessories",
]

VIEWS = ["dashboard", "inventory", "sales", "profits"]
