"""Tests for implementation resolution."""

import pytest

from grpcnav.config import ResolverConfig
from grpcnav.graph import SearchScope
from grpcnav.models import (
    Match,
    NodeData,
    NotFound,
    BLANK_INPUT,
    MISSING_STUB_SUFFIX,
    NO_CANDIDATE,
    NO_IMPLEMENTATION_CLASS,
    METHOD_ABSENT,
    ROLE_SERVICE,
    ROLE_IMPL_BASE,
    ROLE_OTHER,
)
from grpcnav.queries import ImplementationQuery, resolve
from grpcnav.queries.implementation import classify_role, derive_base_name, find_candidates


class TestDeriveBaseName:
    def test_strips_suffix_and_lowercases(self):
        assert derive_base_name("UserServiceStub") == "userservice"

    def test_suffix_is_case_insensitive(self):
        assert derive_base_name("userservicestub") == "userservice"
        assert derive_base_name("USERSTUB") == "user"

    def test_only_trailing_suffix_is_stripped(self):
        assert derive_base_name("StubFactoryStub") == "stubfactory"

    def test_require_policy_rejects_missing_suffix(self):
        assert derive_base_name("userService", policy="require") is None

    def test_strip_policy_proceeds_without_suffix(self):
        assert derive_base_name("userService", policy="strip") == "userservice"

    @pytest.mark.parametrize("policy", ["require", "strip"])
    def test_suffix_only_receiver(self, policy):
        assert derive_base_name("Stub", policy=policy) is None

    def test_custom_suffix(self):
        assert derive_base_name("ordersClient", suffix="Client") == "orders"


class TestClassifyRole:
    def test_roles(self):
        config = ResolverConfig()
        assert classify_role("UserServiceGrpcService", config) == ROLE_SERVICE
        assert classify_role("UserServiceImplBase", config) == ROLE_IMPL_BASE
        assert classify_role("UserServiceCoroutineImplBase", config) == ROLE_IMPL_BASE
        assert classify_role("UserServiceClient", config) == ROLE_OTHER

    def test_suffix_is_case_sensitive(self):
        assert classify_role("UserServiceGrpcservice", ResolverConfig()) == ROLE_OTHER


class TestFindCandidates:
    def test_substring_case_insensitive(self, index):
        names = [c.name for c in find_candidates(index, "userservice")]
        assert names == [
            "UserServiceClient",
            "UserServiceImplBase",
            "UserServiceCoroutineImplBase",
            "UserServiceGrpcService",
        ]

    def test_index_order(self, index):
        names = [c.name for c in find_candidates(index, "inventory", order="index")]
        assert names == ["ZetaInventoryGrpcService", "AlphaInventoryGrpcService"]

    def test_no_candidates(self, index):
        assert find_candidates(index, "payment") == []


class TestResolve:
    def test_priority_one_service(self, index):
        outcome = ImplementationQuery(index).execute("UserServiceStub", "getUser")
        assert isinstance(outcome, Match)
        assert outcome.tier == 1
        assert outcome.class_node.name == "UserServiceGrpcService"
        assert outcome.method_node.id == "m:user_svc.getUser"

    def test_fallback_to_impl_base(self, index):
        outcome = ImplementationQuery(index).execute("UserServiceStub", "deleteUser")
        assert outcome.tier == 2
        assert outcome.class_node.name == "UserServiceImplBase"

    def test_fallback_to_coroutine_impl_base(self, index):
        outcome = ImplementationQuery(index).execute("UserServiceStub", "streamUsers")
        assert outcome.tier == 2
        assert outcome.class_node.name == "UserServiceCoroutineImplBase"

    def test_service_lacking_method_does_not_block_fallback(self, index):
        outcome = ImplementationQuery(index).execute("OrderStub", "cancel")
        assert isinstance(outcome, Match)
        assert outcome.tier == 2
        assert outcome.class_node.name == "OrderServiceImplBase"
        assert outcome.method_node.name == "cancel"

    def test_inherited_method_on_service(self, index):
        outcome = ImplementationQuery(index).execute("BillingStub", "charge")
        assert outcome.tier == 1
        assert outcome.class_node.name == "BillingGrpcService"
        assert outcome.method_node.id == "m:billing_base.charge"

    def test_non_role_class_never_matches(self, index):
        outcome = ImplementationQuery(index).execute("UserServiceClientStub", "getUser")
        assert isinstance(outcome, NotFound)
        assert outcome.reason == NO_IMPLEMENTATION_CLASS

    def test_no_candidate(self, index):
        outcome = ImplementationQuery(index).execute("PaymentStub", "pay")
        assert outcome == NotFound(NO_CANDIDATE, "PaymentStub", "pay")

    def test_no_candidate_regardless_of_method(self, index):
        for method in ("getUser", "cancel", "anything"):
            assert resolve(index, "PaymentStub", method) is None

    def test_method_absent_names_first_qualifying_class(self, index):
        outcome = ImplementationQuery(index).execute("UserServiceStub", "unknown")
        assert outcome.reason == METHOD_ABSENT
        assert outcome.class_name == "UserServiceGrpcService"

    def test_method_absent_on_fallback_only(self, write_index):
        from grpcnav.graph import ProjectIndex

        path = write_index({
            "nodes": [{"id": "c", "kind": "Class", "name": "PingImplBase", "fqn": "PingImplBase"}],
        })
        outcome = ImplementationQuery(ProjectIndex(path)).execute("PingStub", "ping")
        assert outcome.reason == METHOD_ABSENT
        assert outcome.class_name == "PingImplBase"

    @pytest.mark.parametrize("receiver,method", [("", "getUser"), ("UserServiceStub", ""), ("  ", " "), (None, "x")])
    def test_blank_input(self, index, receiver, method):
        outcome = ImplementationQuery(index).execute(receiver, method)
        assert outcome.reason == BLANK_INPUT
        assert resolve(index, receiver, method) is None

    def test_inputs_are_trimmed(self, index):
        outcome = ImplementationQuery(index).execute("  UserServiceStub ", " getUser ")
        assert outcome.method_node.id == "m:user_svc.getUser"

    def test_require_policy_rejects_non_stub(self, index):
        outcome = ImplementationQuery(index).execute("userService", "getUser")
        assert outcome.reason == MISSING_STUB_SUFFIX

    def test_strip_policy_resolves_non_stub(self, index):
        config = ResolverConfig(stub_policy="strip")
        outcome = ImplementationQuery(index, config=config).execute("userService", "getUser")
        assert outcome.class_node.name == "UserServiceGrpcService"

    def test_case_insensitive_receiver(self, index):
        a = ImplementationQuery(index).execute("UserServiceStub", "getUser")
        b = ImplementationQuery(index).execute("userservicestub", "getUser")
        assert a == b

    def test_idempotent(self, index):
        query = ImplementationQuery(index)
        assert query.execute("OrderStub", "cancel") == query.execute("OrderStub", "cancel")

    def test_name_order_tie_break(self, index):
        outcome = ImplementationQuery(index).execute("InventoryStub", "reserve")
        assert outcome.class_node.name == "AlphaInventoryGrpcService"

    def test_index_order_tie_break(self, index):
        config = ResolverConfig(order="index")
        outcome = ImplementationQuery(index, config=config).execute("InventoryStub", "reserve")
        assert outcome.class_node.name == "ZetaInventoryGrpcService"

    def test_scope_limits_candidates(self, index):
        scope = SearchScope.under("build/generated")
        outcome = ImplementationQuery(index, scope=scope).execute("UserServiceStub", "getUser")
        assert outcome.tier == 2
        assert outcome.class_node.name == "UserServiceImplBase"

    def test_custom_suffixes(self, index):
        config = ResolverConfig(service_suffix="Client", fallback_suffixes=())
        outcome = ImplementationQuery(index, config=config).execute("UserServiceStub", "getUser")
        assert outcome.class_node.name == "UserServiceClient"

    def test_resolve_returns_match(self, index):
        match = resolve(index, "OrderStub", "place")
        assert match.class_node.name == "OrderGrpcService"


class FakeIndex:
    """Minimal SymbolIndex backed by plain dicts."""

    def __init__(self, classes: dict[str, list[str]]):
        self.classes = {
            name: NodeData(id=name, kind="Class", name=name, fqn=f"pkg.{name}")
            for name in classes
        }
        self.methods = {
            name: [NodeData(id=f"{name}.{m}", kind="Method", name=m, fqn=f"pkg.{name}::{m}()") for m in ms]
            for name, ms in classes.items()
        }
        self.calls: list[str] = []

    def all_class_names(self):
        self.calls.append("all_class_names")
        return list(self.classes)

    def classes_by_name(self, name, scope=None):
        return [self.classes[name]] if name in self.classes else []

    def find_methods_by_name(self, class_node, method_name, include_inherited=True):
        return [m for m in self.methods[class_node.name] if m.name == method_name]


class TestInjectedIndex:
    def test_scenario(self):
        fake = FakeIndex({
            "OrderGrpcService": ["place"],
            "OrderServiceImplBase": ["place", "cancel"],
        })
        match = resolve(fake, "OrderStub", "cancel")
        assert match.class_node.name == "OrderServiceImplBase"
        assert match.method_node.name == "cancel"

    def test_rejected_receiver_does_not_query_index(self):
        fake = FakeIndex({"UserGrpcService": ["ping"]})
        assert resolve(fake, "user", "ping") is None
        assert fake.calls == []

    def test_case_insensitive_receiver(self):
        fake = FakeIndex({"UserGrpcService": ["ping"]})
        assert resolve(fake, "UserStub", "ping") == resolve(fake, "userstub", "ping")
        assert resolve(fake, "UserStub", "ping") is not None
