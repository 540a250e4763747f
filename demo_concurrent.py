import asyncio
from sdk.productstore import StoreClient


async def create_one(client, n):
    r = await client.create_product_async(f"Gadget {n}", f"Batch gadget number {n}", 10 + n, "gadgets")
    if r.status_code == 201:
        product = r.json()["data"]
        print(f"✅ created {product['name']} as {product['id']}")
        return product["id"]
    print(f"❌ create {n} failed: HTTP {r.status_code} {r.text}")
    return None


async def main():
    c = StoreClient(base_url="http://127.0.0.1:3000", api_key="demo-key")

    ids = await asyncio.gather(*(create_one(c, n) for n in range(20)))
    created = [i for i in ids if i]
    print(f"\n{len(created)} products created, {len(set(created))} distinct ids")

    stats = c.stats()
    print(f"Store now holds {stats['totalProducts']} products, {stats['categories'].get('gadgets', 0)} gadgets")


if __name__ == "__main__":
    asyncio.run(main())
