"""
In-process TTL cache for normalized HUC lookups.

Entries are never deleted on read: an expired entry is treated as absent and
overwritten by the next successful lookup for the same key. The map is split
into shards with one lock each, so concurrent requests for unrelated keys
rarely wait on each other.
"""

import math
import threading
import time
from collections import OrderedDict

from config import HUC_CACHE_TTL, HUC_CACHE_MAX_ENTRIES


def get_cache_key(lat, lng, level):
    """Build the cache key for a lookup.

    Coordinates are rounded to 5 decimal places (about 1.1 m), so repeated
    queries for practically the same point share one entry.

    Args:
        lat (float): latitude
        lng (float): longitude
        level (str): normalized HUC level

    Returns:
        str: e.g. "42.28080:-83.74300:12"
    """
    return f"{lat:.5f}:{lng:.5f}:{level}"


class HucCache:
    """Thread-safe map of cache key -> (expires_at, payload)."""

    def __init__(
        self,
        ttl=HUC_CACHE_TTL,
        max_entries=HUC_CACHE_MAX_ENTRIES,
        shards=16,
        clock=time.time,
    ):
        """
        Args:
            ttl (float): seconds an entry stays live
            max_entries (int): capacity, 0 for unbounded; each shard holds at
                most ceil(max_entries / shards) entries, least recently used
                evicted first, so the total stays within max_entries rounded
                up to a multiple of the shard count
            shards (int): number of independently locked partitions
            clock (callable): returns the current time in seconds
        """
        self.ttl = ttl
        self.clock = clock
        if max_entries:
            # never more shards than entries, so small bounds are exact
            shards = min(shards, max_entries)
            self._shard_capacity = math.ceil(max_entries / shards)
        else:
            self._shard_capacity = None
        self._shards = [(threading.Lock(), OrderedDict()) for _ in range(shards)]

    def _shard(self, key):
        return self._shards[hash(key) % len(self._shards)]

    def get(self, key):
        """Return the payload of a live entry, or None if absent or expired."""
        lock, entries = self._shard(key)
        with lock:
            entry = entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at <= self.clock():
                return None
            entries.move_to_end(key)
            return payload

    def put(self, key, payload, expires_at=None):
        """Store a payload, replacing any previous entry for the key.

        Args:
            key (str): cache key from get_cache_key()
            payload (dict): normalized HUC result
            expires_at (float): absolute expiry time, defaults to now + ttl
        """
        if expires_at is None:
            expires_at = self.clock() + self.ttl
        lock, entries = self._shard(key)
        with lock:
            entries[key] = (expires_at, payload)
            entries.move_to_end(key)
            if self._shard_capacity is not None:
                while len(entries) > self._shard_capacity:
                    entries.popitem(last=False)

    def __len__(self):
        total = 0
        for lock, entries in self._shards:
            with lock:
                total += len(entries)
        return total
