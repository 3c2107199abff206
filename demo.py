#!/usr/bin/env python
from rich import print

from sdk.storefront_client import StoreClient, StoreAPIError
from storefront.config import Settings


def main():
    c = StoreClient(base_url=Settings.from_env().api_url)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    print(c.reset(seed=True))

    # -----------------------------
    # Browse
    # -----------------------------
    print("\nCategories...")
    print(c.list_categories())
    print("\nElectronics...")
    print(c.list_products("Electronics"))

    # -----------------------------
    # Register and login
    # -----------------------------
    print("\nRegistering alice...")
    print(c.register("alice", "wonderland"))
    print(c.login("alice", "wonderland"))

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nAdding products to cart...")
    c.add_to_cart(1001, 1)
    c.add_to_cart(1004, 2)
    print(c.add_to_cart(1004, 1))

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nChecking out...")
    print(c.checkout())
    print(c.list_orders())

    # -----------------------------
    # Stock shortfall
    # -----------------------------
    print("\nAnother shopper buys washing machines while alice is still deciding...")
    c.add_to_cart(1007, 5)
    other = StoreClient(base_url=c.base_url)
    other.login("user1", "pass1")
    other.add_to_cart(1007, 2)
    print(other.checkout())
    try:
        c.checkout()
    except StoreAPIError as e:
        print(f"[red]{e.detail}[/red]")
    print(c.view_cart())

    # -----------------------------
    # Admin
    # -----------------------------
    c.logout()
    c.login("admin", "admin")
    print(c.add_product("Dryer", "Home Appliances", "18999.50", 3))
    print(c.list_products("Home Appliances"))
    c.logout()


if __name__ == "__main__":
    main()
