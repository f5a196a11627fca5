"""Extended tests for replacement policies across sets and block sizes.

These tests programmatically exercise LRU and FIFO with multiple block
counts, associativities and block sizes to ensure eviction behavior is
correct when a set has to evict a way.
"""

from cache3c.core.cache import Cache


def _fill_and_evict(cache: Cache, block_size: int, target_set: int = 0):
    """Fill a single set completely, then access a new tag mapping to the same
    set to trigger an eviction. Returns a tuple (evicted_tag, existing_tags).
    """
    assoc = cache.associativity
    num_sets = cache.num_sets

    # choose addresses that map to target_set: block_id = target_set + k * num_sets
    addrs = [((target_set + k * num_sets) * block_size) for k in range(assoc)]

    # fill all ways
    for a in addrs:
        res = cache.access(a)
        assert res[0] is False

    # existing tags are 0..assoc-1 (because block_id >> index_bits == k)
    existing_tags = list(range(0, assoc))

    # touch the first tag to change recency for LRU tests
    _ = cache.access(addrs[0])

    # Now access a *new* block that maps to the same set but has tag = assoc
    new_block_id = (target_set + assoc * num_sets)
    res = cache.access(new_block_id * block_size)
    evicted = res[3]
    return evicted, existing_tags


def test_policies_various_configs():
    policies = ['LRU', 'FIFO']
    num_blocks_list = [4, 8, 16]
    assoc_choices = [1, 2, 4, 8]
    block_sizes = [1, 2, 4]

    for nb in num_blocks_list:
        for assoc in assoc_choices:
            if assoc > nb or nb % assoc != 0:
                continue
            for bs in block_sizes:
                for policy in policies:
                    c = Cache(cache_size=nb * bs, block_size=bs, associativity=assoc, replacement=policy)
                    assert c.num_blocks == nb
                    assert c.associativity == assoc
                    evicted, tags = _fill_and_evict(c, block_size=bs, target_set=0)
                    assert evicted is not None, f"Policy {policy} should evict when full (nb={nb}, assoc={assoc}, bs={bs})"
                    assert evicted in tags
                    if policy == 'LRU':
                        # addrs[0] was touched after filling, so the oldest is tag 1;
                        # with a single way the touched tag is also the only one
                        expected = 0 if assoc == 1 else 1
                        assert evicted == expected, f"LRU evicted {evicted}, expected {expected} (nb={nb}, a={assoc}, bs={bs})"
                    else:
                        assert evicted == 0, f"FIFO evicted {evicted}, expected 0 (nb={nb}, a={assoc}, bs={bs})"


def test_other_sets_untouched_by_eviction():
    c = Cache(cache_size=16, block_size=1, associativity=2, replacement='LRU')
    # park a block in set 3
    c.access(3)
    _fill_and_evict(c, block_size=1, target_set=0)
    assert c.sets[3].peek() == [0]
    assert c.occupancy() == 3
