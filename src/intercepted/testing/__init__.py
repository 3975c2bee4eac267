"""Intercepted Testing — helpers for asserting interceptor lifecycles."""

from intercepted.testing.recorder import HookCall, RecordingInterceptor, assert_hook_order, hook_order

__all__ = ["HookCall", "RecordingInterceptor", "assert_hook_order", "hook_order"]
