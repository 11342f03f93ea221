import os
import sys
import logging
import pandas as pd

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

# Database models and setup
from database import SessionLocal, init_db
from models.product import Product, ProductSize
from models.users import User

logger = logging.getLogger("populate_db")

# Configuration
DATA_DIR = os.path.join(os.path.dirname(__file__), "data_source")
PRODUCTS_CSV = os.path.join(DATA_DIR, "products.csv")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
# End Configuration


def parse_sizes(raw) -> list:
    """Turn "S:10|M:5" into [("S", 10), ("M", 5)]; later duplicates win."""
    sizes = {}
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return []
    for chunk in str(raw).split("|"):
        if not chunk.strip():
            continue
        size, _, stock = chunk.rpartition(":")
        if not size:
            raise ValueError(f"Bad size entry '{chunk}' (expected SIZE:STOCK)")
        sizes[size.strip()] = max(int(stock), 0)
    return list(sizes.items())


def load_products(csv_path: str = PRODUCTS_CSV) -> pd.DataFrame:
    """Read and clean the catalog CSV."""
    df = pd.read_csv(csv_path)
    df.dropna(subset=["name", "price"], inplace=True)
    df["name"] = df["name"].str.strip()
    df["price"] = df["price"].astype(float).round(2)
    df = df[df["price"] >= 0]
    df = df.drop_duplicates(subset=["name"], keep="last")
    return df


def ensure_admin(session) -> User:
    admin = session.query(User).filter(User.email == ADMIN_EMAIL).first()
    if not admin:
        admin = User(email=ADMIN_EMAIL, role="admin", first_name="Store", last_name="Admin", is_active=True)
        session.add(admin)
        session.commit()
        logger.info("Created admin user %s", ADMIN_EMAIL)
    return admin


def populate(csv_path: str = PRODUCTS_CSV) -> int:
    """Insert catalog products that are not in the database yet. Returns the number inserted."""
    init_db()
    session = SessionLocal()
    try:
        ensure_admin(session)
        df = load_products(csv_path)
        existing = {name for (name,) in session.query(Product.name).all()}

        inserted = 0
        for _, row in df.iterrows():
            if row["name"] in existing:
                continue
            session.add(Product(
                name=row["name"],
                description=None if pd.isna(row.get("description")) else row["description"],
                category=None if pd.isna(row.get("category")) else row["category"],
                price=row["price"],
                image_url=None if pd.isna(row.get("image_url")) else row["image_url"],
                sizes=[ProductSize(size=s, stock=q) for s, q in parse_sizes(row.get("sizes"))],
            ))
            inserted += 1

        session.commit()
        logger.info("Inserted %d products from %s", inserted, csv_path)
        return inserted
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        populate()
    except FileNotFoundError:
        logger.error("Catalog file not found: %s", PRODUCTS_CSV)
        sys.exit(1)
