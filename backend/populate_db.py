"""Demo data for local development: one seller, one buyer and six products.

Run directly to create the tables and seed an empty database:

    python populate_db.py          # seed if empty
    python populate_db.py --reset  # drop everything first
"""
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

from database import Base, SessionLocal, engine, import_models, init_db
from models.product import Product
from models.users import User, UserRole
from utils.hashing import get_password_hash

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {
        "email": "john.seller@example.com",
        "name": "John Seller",
        "role": UserRole.SELLER,
        "avatar": "/images/avatar1.png",
        "phone": "+1234567890",
        "address": "123 Seller St, Commerce City",
    },
    {
        "email": "jane.buyer@example.com",
        "name": "Jane Buyer",
        "role": UserRole.BUYER,
        "avatar": "/images/avatar2.png",
        "phone": "+1234567891",
        "address": "456 Buyer Ave, Shopping Town",
    },
]

DEMO_PRODUCTS = [
    {"title": "Leather Jacket", "price": 120, "category": "Clothing", "image": "/images/jacket.jpeg",
     "rating": 4.5, "description": "Premium leather jacket with modern fit", "stock": 10},
    {"title": "Running Shoes", "price": 80, "category": "Shoes", "image": "/images/shoes.jpeg",
     "rating": 4.2, "description": "Comfortable running shoes for daily workouts", "stock": 15},
    {"title": "Wireless Headphones", "price": 150, "category": "Electronics", "image": "/images/headphones.jpeg",
     "rating": 4.8, "description": "Noise-cancelling wireless headphones", "stock": 8},
    {"title": "Denim Jeans", "price": 60, "category": "Clothing", "image": "/images/jeans.jpeg",
     "rating": 4.0, "description": "Classic fit denim jeans", "stock": 20},
    {"title": "Smartphone", "price": 699, "category": "Electronics", "image": "/images/phone.jpeg",
     "rating": 4.7, "description": "Latest smartphone with advanced features", "stock": 5},
    {"title": "Sneakers", "price": 95, "category": "Shoes", "image": "/images/sneakers.jpeg",
     "rating": 4.3, "description": "Stylish casual sneakers for everyday wear", "stock": 12},
]


def seed_demo_data(session: Session) -> bool:
    """Insert the demo dataset into an empty database. Returns False if users already exist."""
    if session.query(User).first() is not None:
        return False

    password_hash = get_password_hash(DEMO_PASSWORD)
    users = [User(password_hash=password_hash, **data) for data in DEMO_USERS]
    session.add_all(users)
    session.flush()

    # Every demo product belongs to the demo seller
    seller = users[0]
    session.add_all(Product(seller_id=seller.id, **data) for data in DEMO_PRODUCTS)
    session.commit()
    return True


def main(argv):
    if "--reset" in argv:
        print("Usuwanie tabel...")
        import_models()
        Base.metadata.drop_all(bind=engine)
    init_db()

    session = SessionLocal()
    try:
        if seed_demo_data(session):
            print(f"Wstawiono {len(DEMO_USERS)} użytkowników i {len(DEMO_PRODUCTS)} produktów.")
        else:
            print("Baza zawiera już dane, pomijam.")
    finally:
        session.close()


if __name__ == "__main__":
    main(sys.argv[1:])
