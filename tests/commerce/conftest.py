import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def commerce_bed():
    from commerce.domain import commerce

    bed = DomainFixture(commerce)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(commerce_bed):
    with commerce_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def register_variant():
    from commerce.variant.registration import RegisterVariant
    from protean import current_domain

    def _register(variant_id="variant_01", calculated_amount=50.0, **overrides):
        defaults = {
            "variant_id": variant_id,
            "product_id": "prod_01",
            "product_title": "Copy paper",
            "title": "Pallet of 40",
            "calculated_amount": calculated_amount,
        }
        defaults.update(overrides)
        return current_domain.process(RegisterVariant(**defaults), asynchronous=False)

    return _register
