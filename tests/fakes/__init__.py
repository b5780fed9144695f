from tests.fakes.fake_client import FakeEntityClient
from tests.fakes.records import make_record

__all__ = ["FakeEntityClient", "make_record"]
