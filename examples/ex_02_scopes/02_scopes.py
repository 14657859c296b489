"""Scopes: a child container overrides its parent without mutating it.

``resolve`` returns the most specific registration, ``resolve_all`` returns
every registration of the chain with the parent's first.
"""

from __future__ import annotations

from typing import Protocol

from ditree import ContainerBuilder, HostObject


class Greeter(Protocol):
    def greet(self) -> str: ...


class EnglishGreeter:
    def greet(self) -> str:
        return "hello"


class FrenchGreeter:
    def greet(self) -> str:
        return "bonjour"


class Application(HostObject):
    long_lived = True


def main() -> None:
    builder = ContainerBuilder()
    builder.register_type(EnglishGreeter).as_(Greeter).singleton()
    root = builder.build(outer=Application())

    child_builder = root.create_child_container()
    child_builder.register_type(FrenchGreeter).as_(Greeter).singleton()
    child = child_builder.build()

    print(f"root={root.resolve(Greeter).greet()}")  # => root=hello
    print(f"child={child.resolve(Greeter).greet()}")  # => child=bonjour

    with child.resolve_all(Greeter) as greeters:
        print(f"all={[greeter.greet() for greeter in greeters]}")  # => all=['hello', 'bonjour']


if __name__ == "__main__":
    main()
