import asyncio
from sdk.client import ProductClient
import httpx

async def create_one(client, i):
    try:
        p = await client.create_product_async(f"Widget {i}", "Concurrency demo widget", 5 + i, "widgets", i % 2 == 0)
        print(f"✅ created {p['name']} ({p['id']})")
        return p
    except httpx.HTTPStatusError as e:
        print(f"❌ Widget {i} failed: {e.response.status_code} {e.response.text}")
        return None

async def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key="12345")

    before = c.stats()
    print("📊 Stats before:", before)

    print("\n⚡ Creating 20 products concurrently...")
    created = await asyncio.gather(*(create_one(c, i) for i in range(20)))
    created = [p for p in created if p]

    after = c.stats()
    print("\n📊 Stats after:", after)

    ids = {p["id"] for p in created}
    print(f"🆔 {len(ids)} distinct ids for {len(created)} creates")
    print(f"🧮 widgets: {before.get('widgets', 0)} -> {after.get('widgets', 0)}")

if __name__ == "__main__":
    asyncio.run(main())
