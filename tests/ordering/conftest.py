import pytest
from ordering.catalog import set_catalog
from ordering.catalog.fake_adapter import FakeProductCatalog
from ordering.publisher import set_publisher
from ordering.publisher.memory_adapter import InMemoryEventPublisher
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def catalog():
    catalog = FakeProductCatalog()
    catalog.add("prod-burger", "X-Burger", "15.00")
    catalog.add("prod-fries", "Fries", "6.00")
    catalog.add("prod-soda", "Soda", "4.50")
    catalog.add("prod-seasonal", "Seasonal Pie", "9.90", is_available=False)
    return catalog


@pytest.fixture()
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture(autouse=True)
def _adapters(catalog, publisher):
    set_catalog(catalog)
    set_publisher(publisher)
