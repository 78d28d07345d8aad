"""Shared fixtures: a small Kotlin/Java gRPC project exported as a symbol index."""

import json

import pytest

from grpcnav.graph import ProjectIndex

SRC = "src/main/kotlin/com/example"
GEN = "build/generated/source/proto/main"


def _class(node_id, name, fqn, file, line=0):
    return {
        "id": node_id,
        "kind": "Class",
        "name": name,
        "fqn": fqn,
        "file": file,
        "range": {"start_line": line, "start_col": 0, "end_line": line + 20, "end_col": 1},
    }


def _method(node_id, name, owner_fqn, file, line):
    return {
        "id": node_id,
        "kind": "Method",
        "name": name,
        "fqn": f"{owner_fqn}::{name}()",
        "file": file,
        "range": {"start_line": line, "start_col": 4, "end_line": line + 3, "end_col": 5},
    }


def build_sample_data() -> dict:
    user_svc = "com.example.user.UserServiceGrpcService"
    user_base = "com.example.user.UserServiceGrpc.UserServiceImplBase"
    user_co = "com.example.user.UserServiceGrpcKt.UserServiceCoroutineImplBase"
    user_client = "com.example.user.UserServiceClient"
    order_svc = "com.example.order.OrderGrpcService"
    order_base = "com.example.order.OrderServiceGrpc.OrderServiceImplBase"
    billing_svc = "com.example.billing.BillingGrpcService"
    billing_base = "com.example.billing.BillingServiceGrpc.BillingServiceImplBase"
    zeta = "com.example.inventory.ZetaInventoryGrpcService"
    alpha = "com.example.inventory.AlphaInventoryGrpcService"

    user_svc_file = f"{SRC}/user/UserServiceGrpcService.kt"
    user_gen_file = f"{GEN}/grpc/com/example/user/UserServiceGrpc.java"
    user_kt_file = f"{GEN}/grpckt/com/example/user/UserServiceGrpcKt.kt"
    order_file = f"{SRC}/order/OrderGrpcService.kt"
    order_gen_file = f"{GEN}/grpc/com/example/order/OrderServiceGrpc.java"
    billing_file = f"{SRC}/billing/BillingGrpcService.kt"
    billing_gen_file = f"{GEN}/grpc/com/example/billing/BillingServiceGrpc.java"
    inventory_file = f"{SRC}/inventory/InventoryServices.kt"

    nodes = [
        _class("c:user_svc", "UserServiceGrpcService", user_svc, user_svc_file, 10),
        _method("m:user_svc.getUser", "getUser", user_svc, user_svc_file, 14),
        _method("m:user_svc.listUsers", "listUsers", user_svc, user_svc_file, 22),
        _class("c:user_base", "UserServiceImplBase", user_base, user_gen_file, 200),
        _method("m:user_base.getUser", "getUser", user_base, user_gen_file, 210),
        _method("m:user_base.deleteUser", "deleteUser", user_base, user_gen_file, 220),
        _class("c:user_co", "UserServiceCoroutineImplBase", user_co, user_kt_file, 50),
        _method("m:user_co.getUser", "getUser", user_co, user_kt_file, 60),
        _method("m:user_co.streamUsers", "streamUsers", user_co, user_kt_file, 70),
        _class("c:user_client", "UserServiceClient", user_client, f"{SRC}/user/UserServiceClient.kt", 5),
        _method("m:user_client.getUser", "getUser", user_client, f"{SRC}/user/UserServiceClient.kt", 9),
        _class("c:order_svc", "OrderGrpcService", order_svc, order_file, 8),
        _method("m:order_svc.place", "place", order_svc, order_file, 12),
        _class("c:order_base", "OrderServiceImplBase", order_base, order_gen_file, 300),
        _method("m:order_base.place", "place", order_base, order_gen_file, 310),
        _method("m:order_base.cancel", "cancel", order_base, order_gen_file, 320),
        _class("c:billing_svc", "BillingGrpcService", billing_svc, billing_file, 3),
        _class("c:billing_base", "BillingServiceImplBase", billing_base, billing_gen_file, 100),
        _method("m:billing_base.charge", "charge", billing_base, billing_gen_file, 110),
        _class("c:zeta", "ZetaInventoryGrpcService", zeta, inventory_file, 1),
        _method("m:zeta.reserve", "reserve", zeta, inventory_file, 4),
        _class("c:alpha", "AlphaInventoryGrpcService", alpha, inventory_file, 30),
        _method("m:alpha.reserve", "reserve", alpha, inventory_file, 33),
    ]

    edges = []
    for node in nodes:
        if node["kind"] == "Method":
            owner = "c:" + node["id"][2:].split(".")[0]
            edges.append({"type": "contains", "source": owner, "target": node["id"]})
    edges.append({"type": "extends", "source": "c:billing_svc", "target": "c:billing_base"})
    edges.append({"type": "extends", "source": "c:user_svc", "target": "external:io.grpc.BindableService"})

    return {"version": "1.0", "metadata": {"project": "example"}, "nodes": nodes, "edges": edges}


@pytest.fixture
def write_index(tmp_path):
    """Factory writing index data to a JSON file and returning its path."""

    def _write(data: dict, name: str = "index.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def sample_index_path(write_index):
    return write_index(build_sample_data())


@pytest.fixture
def index(sample_index_path):
    """Create an index from the sample data."""
    return ProjectIndex(sample_index_path)
