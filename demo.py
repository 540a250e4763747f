#!/usr/bin/env python
from sdk.productstore import ProductApiError, StoreClient


def main():
    c = StoreClient(base_url="http://127.0.0.1:3000", api_key="demo-key")

    print("Service info...")
    print(c.info())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    kettle = c.create_product("Electric Kettle", "1.7L stainless steel kettle", 35, "kitchen")
    mouse = c.create_product("Wireless Mouse", "Ergonomic 2.4GHz mouse", 25.5, "electronics", in_stock=False)
    print(kettle)
    print(mouse)

    # -----------------------------
    # List, filter, paginate
    # -----------------------------
    print("\nListing products (page 1, limit 2)...")
    print(c.list_products(page=1, limit=2))

    print("\nElectronics in stock...")
    print(c.list_products(category="Electronics", in_stock=True))

    # -----------------------------
    # Search and stats
    # -----------------------------
    print("\nSearching for 'mouse'...")
    print(c.search_products("mouse"))

    print("\nStats...")
    print(c.stats())

    # -----------------------------
    # Update then delete
    # -----------------------------
    print("\nRestocking the mouse...")
    print(c.update_product(mouse["id"], "Wireless Mouse", "Ergonomic 2.4GHz mouse", 22, "electronics", in_stock=True))

    print("\nDeleting the kettle...")
    print(c.delete_product(kettle["id"]))

    try:
        c.get_product(kettle["id"])
    except ProductApiError as e:
        print(f"Kettle is gone: {e}")

if __name__ == "__main__":
    main()
