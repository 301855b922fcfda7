#!/usr/bin/env python3
"""
Demo script for equine cache.

This script walks through read-through caching, category isolation and
invalidation against a small simulated breed database.
"""

import asyncio
import time

from equine_cache import CacheService, InMemoryCacheRepository
from equine_cache.policy import CachePolicy

BREEDS = {
    1: {"id": 1, "name": "Arabian", "category": "light"},
    2: {"id": 2, "name": "Clydesdale", "category": "draft"},
    3: {"id": 3, "name": "Shetland Pony", "category": "pony"},
    4: {"id": 4, "name": "Tennessee Walking Horse", "category": "gaited"},
}

QUERY_LATENCY_S = 0.05
queries = 0


async def query_breed(breed_id: int) -> dict | None:
    """Simulated database lookup."""
    global queries
    queries += 1
    await asyncio.sleep(QUERY_LATENCY_S)
    breed = BREEDS.get(breed_id)
    return dict(breed) if breed else None


async def query_breeds(category: str | None) -> list[dict]:
    global queries
    queries += 1
    await asyncio.sleep(QUERY_LATENCY_S)
    return [dict(b) for b in BREEDS.values() if category is None or b["category"] == category]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_read_through(cache: CacheService) -> None:
    """Demonstrate cache misses followed by hits."""
    print_section("Read-Through Lookups")

    for attempt in range(1, 4):
        start = time.perf_counter()
        breed = await cache.get_cached_breed(1, lambda: query_breed(1))
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"  Attempt {attempt}: {breed['name']:<10} {elapsed_ms:6.2f} ms  (db queries: {queries})")

    print("\n  Missing breeds are not cached:")
    for _ in range(2):
        result = await cache.get_cached_breed(99, lambda: query_breed(99))
        print(f"    breed 99 -> {result}  (db queries: {queries})")


async def demo_categories(cache: CacheService) -> None:
    """Demonstrate independent category keys."""
    print_section("Category Lists")

    for category in ("light", "draft", "light", None):
        breeds = await cache.get_cached_breed_list(category, lambda c=category: query_breeds(c))
        label = category or "(all)"
        print(f"  {label:<8} -> {[b['name'] for b in breeds]}  (db queries: {queries})")


async def demo_invalidation(cache: CacheService) -> None:
    """Demonstrate invalidation after an edit."""
    print_section("Invalidation")

    print(f"  Keys before edit: {sorted(cache.get_cache_stats().keys)}")

    BREEDS[1]["name"] = "Arabian Horse"
    stale = await cache.get_cached_breed(1, lambda: query_breed(1))
    print(f"  Edited without invalidation -> {stale['name']} (stale until TTL)")

    await cache.invalidate_breed_cache(1)
    print(f"  Keys after invalidate_breed_cache(1): {sorted(cache.get_cache_stats().keys)}")

    fresh = await cache.get_cached_breed(1, lambda: query_breed(1))
    print(f"  Next read -> {fresh['name']}  (db queries: {queries})")


async def demo_coalescing() -> None:
    """Demonstrate concurrent misses with and without coalescing."""
    global queries
    print_section("Concurrent Misses")

    for coalesce in (False, True):
        queries = 0
        cache = CacheService(InMemoryCacheRepository(), CachePolicy.default(), coalesce=coalesce)
        await asyncio.gather(*(cache.get_cached_breed(2, lambda: query_breed(2)) for _ in range(10)))
        print(f"  coalesce={coalesce!s:<5} 10 concurrent reads -> {queries} db queries")


async def main() -> None:
    cache = CacheService(InMemoryCacheRepository(), CachePolicy.default())

    await demo_read_through(cache)
    await demo_categories(cache)
    await demo_invalidation(cache)
    await demo_coalescing()

    print_section("Stats")
    for name, value in cache.get_stats()["metrics"].items():
        print(f"  {name:<16} {value}")


if __name__ == "__main__":
    asyncio.run(main())
