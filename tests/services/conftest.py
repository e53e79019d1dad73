"""Service test fixtures: fake document, field set, and dispatcher factory.

Invariants:
    - Every test gets a fresh FakeDocument with calculation enabled
    - make_dispatcher wires fields, order, and registry exactly as a host would
"""

import pytest

from fieldscript.core.handler_registry import HandlerRegistry
from fieldscript.services.event_dispatch import EventDispatcher
from fieldscript.services.pipeline_context import PipelineContext
from tests.services.fake_document import FakeDocument, build_fields


@pytest.fixture
def document():
    return FakeDocument()


@pytest.fixture
def registry():
    return HandlerRegistry()


@pytest.fixture
def make_dispatcher(document, registry):
    """Factory: make_dispatcher(fields_dict, order=None, settings=None)."""
    def _make(objects, order=None, settings=None):
        return EventDispatcher(
            document, order, objects, registry=registry, settings=settings,
        )
    return _make


@pytest.fixture
def abc_fields(document):
    """Three fields A, B, C used by calculation tests."""
    return build_fields(document, ("A", "1"), ("B", "2"), ("C", "3"))


@pytest.fixture
def make_context(document, registry):
    """Factory for a bare PipelineContext (stage-level tests)."""
    def _make(objects, order=None):
        return PipelineContext(
            document=document,
            calculation_order=tuple(order) if order is not None else None,
            objects=objects,
            registry=registry,
        )
    return _make
