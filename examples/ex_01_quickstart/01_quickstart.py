"""Quickstart: register an interface, let injection hooks wire the rest.

Only ``Logger`` is registered. ``UserService`` and ``UserRepository`` are
auto-registered as transient on first use and receive their dependencies
through their injection hooks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ditree import ContainerBuilder, Resolver


class Logger(ABC):
    @abstractmethod
    def log(self, message: str) -> None: ...


class PrintLogger(Logger):
    def log(self, message: str) -> None:
        print(message)


class UserRepository:
    def inject_dependencies(self, logger: Logger) -> None:
        self.logger = logger


class UserService:
    def init_dependencies(self, resolver: Resolver) -> None:
        self.repository = resolver.resolve(UserRepository)


def main() -> None:
    builder = ContainerBuilder()
    builder.register_type(PrintLogger).as_(Logger).singleton()
    container = builder.build()

    service = container.resolve(UserService)
    service.repository.logger.log("service ready")  # => service ready

    chain = f"{type(service).__name__}>{type(service.repository).__name__}"
    print(f"chain={chain}")  # => chain=UserService>UserRepository


if __name__ == "__main__":
    main()
