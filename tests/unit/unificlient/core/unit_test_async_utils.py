from unificlient.core.async_utils import (
    async_to_sync,
    otel_trace_method,
    wrap_async_to_sync,
)


@async_to_sync
class Greeter:
    def __init__(self, name: str) -> None:
        self.name = name

    @otel_trace_method(method_to_trace_name=lambda self, **kwargs: f"Greet: {self.name}")
    async def greet_async(self, punctuation: str = "!") -> str:
        return f"Hello {self.name}{punctuation}"

    @classmethod
    async def create_async(cls, name: str) -> "Greeter":
        return cls(name)


def test_sync_methods_are_generated() -> None:
    # GIVEN a class decorated with async_to_sync
    greeter = Greeter("Ada")

    # WHEN I call the generated synchronous methods
    # THEN they return what the async versions return
    assert greeter.greet(punctuation="?") == "Hello Ada?"
    assert Greeter.create("Bob").name == "Bob"
    assert greeter.greet.__name__ == "greet"


async def test_wrap_async_to_sync_inside_running_loop() -> None:
    # GIVEN a running event loop
    # WHEN a coroutine is run synchronously from inside it
    # THEN it still completes
    assert wrap_async_to_sync(Greeter("Eve").greet_async()) == "Hello Eve!"
