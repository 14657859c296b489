from __future__ import annotations

from ditree.lifetimes import (
    CollectedReferences,
    InstanceLifetime,
    Lifetime,
    SingletonLifetime,
    TransientLifetime,
)


class Service:
    pass


def test_singleton_caches_first_instance() -> None:
    lifetime = SingletonLifetime()
    instance = Service()

    assert lifetime.get() is None
    lifetime.set(instance)

    assert lifetime.get() is instance


def test_transient_never_caches() -> None:
    lifetime = TransientLifetime()

    lifetime.set(Service())

    assert lifetime.get() is None


def test_instance_lifetime_is_prefilled() -> None:
    instance = Service()

    assert InstanceLifetime(instance).get() is instance


def test_singleton_reports_held_instance_only() -> None:
    lifetime = SingletonLifetime()
    collector = CollectedReferences()

    lifetime.report_references(collector)
    assert len(collector) == 0

    instance = Service()
    lifetime.set(instance)
    lifetime.report_references(collector)

    assert collector.objects == [instance]


def test_transient_reports_nothing() -> None:
    collector = CollectedReferences()

    TransientLifetime().report_references(collector)

    assert len(collector) == 0


def test_lifetime_enum_creates_fresh_handlers() -> None:
    first = Lifetime.SINGLETON.create_handler()
    second = Lifetime.SINGLETON.create_handler()

    assert isinstance(first, SingletonLifetime)
    assert first is not second
    assert isinstance(Lifetime.TRANSIENT.create_handler(), TransientLifetime)


def test_collector_ignores_none_and_compares_by_identity() -> None:
    collector = CollectedReferences()
    first, second = Service(), Service()

    collector.add_referenced_object(None)
    collector.add_referenced_object(first)

    assert first in collector
    assert second not in collector
    assert len(collector) == 1
