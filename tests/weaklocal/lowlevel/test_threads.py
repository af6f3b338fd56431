#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import _thread
import threading
import weakref

from concurrent.futures import ThreadPoolExecutor

import pytest

import weaklocal

from weaklocal._monkey import import_original


def test_current_thread():
    thread1 = weaklocal.lowlevel.current_thread()
    with ThreadPoolExecutor(1) as executor:
        future = executor.submit(weaklocal.lowlevel.current_thread)
        thread2 = future.result()
    with ThreadPoolExecutor(1) as executor:
        future = executor.submit(weaklocal.lowlevel.current_thread)
        thread3 = future.result()

    assert thread1 is threading.main_thread()
    assert thread1 is not thread2
    assert thread1 is not thread3
    assert thread2 is not thread3


def _test_current_thread_on(threading):
    thread_obj = None
    thread_ident = None

    def run():
        nonlocal thread_obj
        nonlocal thread_ident

        thread_obj = weaklocal.lowlevel.current_thread()
        thread_ident = weaklocal.lowlevel.current_thread_ident()

    thread = threading.Thread(target=run)
    thread.start()
    thread.join()

    assert thread_obj is thread
    assert thread_ident == thread.ident


def test_current_thread_on_threading():
    _test_current_thread_on(threading)


def test_current_thread_on_eventlet():
    patcher = pytest.importorskip("eventlet.patcher")

    # threads of the original module live outside `threading._active`
    _test_current_thread_on(patcher.original("threading"))

    get_ident = import_original("_thread", "get_ident")

    assert get_ident() == _thread.get_ident()


def test_current_thread_on_gevent():
    monkey = pytest.importorskip("gevent.monkey")

    _test_current_thread_on(threading)

    get_ident = import_original("_thread", "get_ident")

    assert get_ident is monkey.get_original("_thread", "get_ident")


def test_current_thread_on_foreign_thread():
    thread_obj = None
    thread_ident = None
    finished = threading.Event()

    def run():
        nonlocal thread_obj
        nonlocal thread_ident

        try:
            thread_obj = weaklocal.lowlevel.current_thread()
            thread_ident = weaklocal.lowlevel.current_thread_ident()

            # a repeated call must return the same object
            assert weaklocal.lowlevel.current_thread() is thread_obj
        finally:
            finished.set()

    _thread.start_new_thread(run, ())

    assert finished.wait(5)

    assert isinstance(thread_obj, threading.Thread)
    assert thread_obj.ident == thread_ident


def test_current_thread_weakrefing():
    thread = weaklocal.lowlevel.current_thread()

    assert weakref.ref(thread)() is thread


def test_thread_is_alive():
    event = threading.Event()
    thread = threading.Thread(target=event.wait)
    thread.start()

    try:
        assert weaklocal.lowlevel.thread_is_alive(thread)
    finally:
        event.set()
        thread.join()

    assert not weaklocal.lowlevel.thread_is_alive(thread)
    assert weaklocal.lowlevel.thread_is_alive(
        weaklocal.lowlevel.current_thread()
    )


def test_create_thread_lock():
    lock = weaklocal.lowlevel.create_thread_lock()

    assert isinstance(lock, weaklocal.lowlevel.ThreadLock)
    assert not lock.locked()

    with lock:
        assert lock.locked()
        assert not lock.acquire(blocking=False)

    assert not lock.locked()
