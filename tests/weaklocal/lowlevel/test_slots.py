#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import gc
import pickle

from concurrent.futures import ThreadPoolExecutor

import pytest

import weaklocal


class TestWeakSlot:
    factory = weaklocal.lowlevel.WeakSlot

    def test_base(self, /):
        slot = self.factory()

        assert not slot.is_bound()
        assert slot.get() is None
        assert slot.get("default") == "default"

        assert repr(slot).startswith("<weaklocal.lowlevel.WeakSlot object")
        assert repr(slot).endswith("[unbound]>")

    def test_attrs(self, /):
        slot = self.factory()

        with pytest.raises(AttributeError):
            slot.nonexistent_attribute  # noqa: B018
        with pytest.raises(AttributeError):
            slot.nonexistent_attribute = 42
        with pytest.raises(AttributeError):
            del slot.nonexistent_attribute

    def test_get_and_set(self, /):
        slot = self.factory()

        box = slot.set("value")

        assert slot.is_bound()
        assert slot.get() == "value"
        assert slot.get("default") == "value"
        assert box.value == "value"
        assert repr(slot).endswith("[bound]>")

        box = slot.set(None)  # None is a regular value

        assert slot.get("default") is None

        box = slot.set(42)

        assert slot.get() == 42

    def test_weakness(self, /):
        slot = self.factory()

        box = slot.set([1, 2, 3])

        gc.collect()

        assert slot.get() == [1, 2, 3]

        del box
        gc.collect()

        assert slot.is_bound()
        assert slot.get() is None
        assert slot.get("default") == "default"

    def test_clear(self, /):
        slot = self.factory()

        slot.clear()  # no-op

        box = slot.set("value")
        slot.clear()

        assert not slot.is_bound()
        assert slot.get() is None
        assert box.value == "value"

        slot.clear()

        assert not slot.is_bound()

    def test_thread_isolation(self, /):
        slot = self.factory()

        box = slot.set("main")

        def work():
            assert not slot.is_bound()
            assert slot.get() is None

            other_box = slot.set("worker")

            assert slot.get() == "worker"

            return other_box

        with ThreadPoolExecutor(1) as executor:
            other_box = executor.submit(work).result()

        assert slot.get() == "main"
        assert box.value == "main"
        assert other_box.value == "worker"

    def test_pickling(self, /):
        slot = self.factory()

        with pytest.raises(TypeError):
            pickle.dumps(slot)

        box = slot.set("value")

        with pytest.raises(TypeError):
            pickle.dumps(box)
