import pytest
from cache3c.core.cache import Cache
from cache3c.core.errors import ConfigurationError
from cache3c.core.replacement_policies import FIFOReplacement, LRUReplacement, make_replacement_set


def test_lru_eviction():
    # 256 bytes / 64-byte blocks = 4 blocks, 2-way -> 2 sets
    c = Cache(cache_size=256, block_size=64, associativity=2, replacement='LRU')
    # fill set 0 with blocks 0 and 2 (addresses 0 and 128)
    assert c.access(0)[0] is False
    assert c.access(128)[0] is False
    # access 0 to mark it MRU
    assert c.access(0)[0] is True
    # block 4 maps to the same set and should evict the LRU tag (block 2 -> tag 1)
    res = c.access(256)
    evicted = res[3]
    assert evicted == 1


def test_fifo_eviction():
    c = Cache(cache_size=256, block_size=64, associativity=2, replacement='FIFO')
    assert c.access(0)[0] is False
    assert c.access(128)[0] is False
    # a hit does not reorder a FIFO set
    assert c.access(0)[0] is True
    # FIFO should evict the first inserted (block 0 -> tag 0)
    res = c.access(256)
    assert res[3] == 0


def test_insert_present_key_is_a_touch():
    s = LRUReplacement(2)
    assert s.insert('a') is None
    assert s.insert('b') is None
    # re-inserting does not grow the set and does not evict
    assert s.insert('a') is None
    assert len(s) == 2
    assert s.peek() == ['b', 'a']
    # set is full: next insert evicts the oldest
    assert s.insert('c') == 'b'
    assert s.peek() == ['a', 'c']


def test_fifo_touch_keeps_insertion_order():
    s = FIFOReplacement(3)
    for k in (1, 2, 3):
        s.insert(k)
    s.touch(1)
    assert s.insert(1) is None
    assert s.peek() == [1, 2, 3]
    assert s.insert(4) == 1


def test_lru_touch_moves_to_newest():
    s = LRUReplacement(3)
    for k in (1, 2, 3):
        s.insert(k)
    s.touch(1)
    assert s.peek() == [2, 3, 1]
    assert s.evict() == 2


def test_capacity_never_exceeded_and_keys_unique():
    for policy in ('LRU', 'FIFO'):
        s = make_replacement_set(policy, 4)
        for k in [1, 2, 3, 1, 4, 5, 2, 6, 6, 7, 1]:
            s.insert(k)
            assert len(s) <= 4
            assert len(set(s.peek())) == len(s.peek())


def test_policy_names_are_case_insensitive():
    assert isinstance(make_replacement_set('lru', 2), LRUReplacement)
    assert isinstance(make_replacement_set('fifo', 2), FIFOReplacement)


def test_unknown_policy_rejected():
    with pytest.raises(ConfigurationError):
        make_replacement_set('Random', 2)
    with pytest.raises(ConfigurationError):
        Cache(cache_size=256, block_size=64, associativity=2, replacement='Random')


def test_evict_and_reset_on_empty_set():
    s = LRUReplacement(1)
    assert s.evict() is None
    s.insert(9)
    s.reset()
    assert len(s) == 0
    assert 9 not in s
