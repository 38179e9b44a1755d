#!/usr/bin/env python3
"""
Seed the catalog with sample products, or with products from a JSON file.
Products are matched by name, so running it twice does not duplicate rows.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file catalog.json
"""
import argparse
import json
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from webshop.db import SessionLocal, init_db
from webshop.repositories.product_repo import ProductRepository
from webshop.utils.log import configure_logging, get_logger

log = get_logger("seed")

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "High-quality wireless headphones with noise cancellation and 30-hour battery life",
        "price": "99.99",
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=300&h=200&fit=crop",
        "category": "Electronics",
        "stock": 50,
    },
    {
        "name": "Smart Watch",
        "description": "Advanced smartwatch with health monitoring, GPS, and water resistance",
        "price": "199.99",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=300&h=200&fit=crop",
        "category": "Electronics",
        "stock": 25,
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand for better ergonomics and cooling",
        "price": "49.99",
        "image": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=300&h=200&fit=crop",
        "category": "Accessories",
        "stock": 100,
    },
    {
        "name": "Bluetooth Speaker",
        "description": "Portable Bluetooth speaker with 360-degree sound and 12-hour battery",
        "price": "79.99",
        "image": "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=300&h=200&fit=crop",
        "category": "Electronics",
        "stock": 75,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "RGB mechanical keyboard with Cherry MX switches for gaming and typing",
        "price": "129.99",
        "image": "https://images.unsplash.com/photo-1541140532154-b024d705b90a?w=300&h=200&fit=crop",
        "category": "Accessories",
        "stock": 30,
    },
]


def _normalize_entry(entry):
    """Return a dict with keys: name, description, price, image, category, stock"""
    name = (entry.get("name") or entry.get("title") or "").strip()
    try:
        price = Decimal(str(entry.get("price", 0)))
    except InvalidOperation:
        price = Decimal("0")
    try:
        stock = int(entry.get("stock", 0) or 0)
    except (TypeError, ValueError):
        stock = 0
    return {
        "name": name,
        "description": entry.get("description") or "",
        "price": price,
        "image": entry.get("image") or entry.get("img"),
        "category": entry.get("category"),
        "stock": stock,
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", list(data.values()))
    return data if isinstance(data, list) else []


def seed(entries) -> int:
    """Insert entries whose name is not in the catalog yet; returns how many were added."""
    db = SessionLocal()
    repo = ProductRepository(db)
    created = 0
    try:
        for entry in entries:
            fields = _normalize_entry(entry)
            if not fields["name"] or repo.get_by_name(fields["name"]):
                continue
            repo.create(fields)
            created += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    log.info("Seeded products: %s", created)
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of products")
    args = parser.parse_args()
    configure_logging()
    init_db()
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        seed(load_entries(args.file))
    else:
        seed(SAMPLE_PRODUCTS)
