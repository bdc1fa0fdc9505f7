"""
Rendered-view cache and path revalidation.

Dashboard views are stored in Redis under ``<prefix>view:<path>::<scope>``.
A mutation calls ``revalidate_paths`` with the routes it touched and every
scope rendered at those routes is dropped, so the next read recomputes it.
Redis being down degrades to "always miss"; it never fails the caller.
"""
import json
from datetime import timedelta
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger

CACHE_PREFIX = settings.cache.prefix
VIEW_PREFIX = f"{CACHE_PREFIX}view:"


def build_redis_client() -> Optional[redis.Redis]:
    if not settings.cache.enabled:
        logger.info("Caching disabled; revalidation signals will be no-ops")
        return None
    conf = settings.redis
    client = redis.Redis(
        host=conf.host,
        port=conf.port,
        db=conf.db,
        password=conf.password_str,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    logger.info(f"Redis client initialized: {conf.host}:{conf.port}, db={conf.db}")
    return client


redis_client = build_redis_client()


def view_key(path: str, scope: str = "all") -> str:
    return f"{VIEW_PREFIX}{path}::{scope}"


async def set_cache(key: str, value: Any, expire: Optional[timedelta] = None) -> bool:
    if redis_client is None:
        return False
    try:
        payload = json.dumps(value, default=str)
        seconds = int(expire.total_seconds()) if expire else None
        return bool(await redis_client.set(key, payload, ex=seconds))
    except RedisError as exc:
        logger.error(f"Cache write failed for {key}: {exc}")
        return False


async def get_cache(key: str) -> Optional[Any]:
    if redis_client is None:
        return None
    try:
        raw = await redis_client.get(key)
    except RedisError as exc:
        logger.error(f"Cache read failed for {key}: {exc}")
        return None
    return None if raw is None else json.loads(raw)


async def invalidate_cache_pattern(pattern: str) -> int:
    """Delete every key matching the glob ``pattern``; returns how many went."""
    if redis_client is None:
        return 0
    try:
        keys = [key async for key in redis_client.scan_iter(match=pattern)]
        return await redis_client.delete(*keys) if keys else 0
    except RedisError as exc:
        logger.error(f"Cache invalidation failed for {pattern}: {exc}")
        return 0


async def cached_view(path: str, scope: str = "all") -> Optional[Any]:
    return await get_cache(view_key(path, scope))


async def store_view(path: str, value: Any, scope: str = "all") -> bool:
    return await set_cache(view_key(path, scope), value, expire=timedelta(seconds=settings.cache.ttl))


async def revalidate_paths(*paths: str) -> int:
    """
    Mark the views rendered at ``paths`` stale.

    Matching is per exact path: revalidating "/dashboard" leaves
    "/dashboard/cri" cached. Repeating a path is harmless.
    """
    dropped = 0
    for path in dict.fromkeys(paths):
        dropped += await invalidate_cache_pattern(f"{VIEW_PREFIX}{path}::*")
    logger.debug(f"Revalidated {', '.join(paths)} ({dropped} cached views dropped)")
    return dropped


async def check_redis_connection() -> bool:
    if redis_client is None:
        return False
    try:
        return bool(await redis_client.ping())
    except RedisError as exc:
        logger.error(f"Redis ping failed: {exc}")
        return False
