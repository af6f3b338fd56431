#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2024 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import inspect
import sys
import threading

from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial
from itertools import chain
from pathlib import Path

import pytest

from wrapt import decorator

if sys.version_info >= (3, 11):
    WaitTimeout = TimeoutError
else:
    from concurrent.futures import TimeoutError as WaitTimeout

THREAD_SAFETY_DURATION = 6


def _test_thread_safety_impl(*functions):
    with ThreadPoolExecutor(len(functions)) as executor:
        barrier = threading.Barrier(len(functions) + 1)
        stopped = threading.Event()

        @decorator
        def _wrapper(wrapped, instance, args, kwargs):
            barrier.wait()

            if "stopped" in inspect.signature(wrapped).parameters:
                kwargs = {**kwargs, "stopped": stopped}

            while True:
                result = wrapped(*args, **kwargs)

                if stopped.is_set():
                    break

            return result

        interval = sys.getswitchinterval()
        sys.setswitchinterval(min(1e-6, interval))

        try:
            futures = {executor.submit(_wrapper(f)) for f in functions}

            try:
                barrier.wait()

                for future in as_completed(
                    futures,
                    timeout=THREAD_SAFETY_DURATION,
                ):
                    future.result()  # reraise
            except WaitTimeout:
                return True
            finally:
                stopped.set()

            return False
        finally:
            sys.setswitchinterval(interval)


@pytest.fixture
def test_thread_safety():
    return _test_thread_safety_impl


def pytest_addoption(parser):
    parser.addoption(
        "--thread-safety",
        action="store_true",
        default=False,
        help="run thread-safety tests",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "threadsafe: mark test as thread-safety test",
    )


def pytest_collection_modifyitems(config, items):
    directory = Path(__file__).parent
    ordered_tests = defaultdict(
        partial(defaultdict, list),
        {
            "weaklocal.test_meta": defaultdict(list),
            "weaklocal.lowlevel.test_threads": defaultdict(list),
            "weaklocal.lowlevel.test_slots": defaultdict(list),
            "weaklocal.lowlevel.test_registry": defaultdict(list),
            "weaklocal.lowlevel.test_purge": defaultdict(list),
            "weaklocal.test_local": defaultdict(list),
        },
    )

    for item in items:
        module_name = ".".join(item.path.relative_to(directory).parts)[:-3]
        ordered_tests[module_name][item.obj].append(item)

        if "test_thread_safety" in item.fixturenames:
            item.add_marker(pytest.mark.threadsafe)

        if "threadsafe" in item.keywords:
            if not config.getoption("--thread-safety"):
                item.add_marker(
                    pytest.mark.skip(
                        reason="need --thread-safety option to run",
                    )
                )

    items[:] = chain.from_iterable(
        chain.from_iterable(mapping.values())
        for mapping in ordered_tests.values()
    )
