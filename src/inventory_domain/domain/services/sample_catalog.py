"""Sample data used to seed an empty store."""

SAMPLE_PRODUCTS = [
    {"name": "Basic White T-Shirt", "category": "T-Shirts", "stock": 45, "cost": 8.50, "price": 19.99},
    {"name": "Slim Fit Jeans", "category": "Trousers", "stock": 28, "cost": 25.00, "price": 59.99},
    {"name": "Floral Summer Dress", "category": "Dresses", "stock": 15, "cost": 30.00, "price": 79.99},
    {"name": "Leather Jacket", "category": "Jackets", "stock": 8, "cost": 80.00, "price": 199.99},
    {"name": "Wool Scarf", "category": "Accessories", "stock": 32, "cost": 12.00, "price": 29.99},
    {"name": "Printed T-Shirt", "category": "T-Shirts", "stock": 52, "cost": 10.00, "price": 24.99},
    {"name": "Sport Trousers", "category": "Trousers", "stock": 38, "cost": 18.00, "price": 44.99},
    {"name": "Evening Dress", "category": "Dresses", "stock": 6, "cost": 60.00, "price": 149.99},
]

# (product name, quantity, days ago) of the sales recorded when seeding
SAMPLE_SALES = [
    ("Basic White T-Shirt", 5, 2),
    ("Slim Fit Jeans", 3, 2),
    ("Floral Summer Dress", 2, 1),
    ("Wool Scarf", 4, 1),
    ("Printed T-Shirt", 7, 0),
]
