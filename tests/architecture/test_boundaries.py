from pytest_archon import archrule

CONTEXTS = ("attribution", "gift_request", "security")


def test_shared_domain_isolation() -> None:
    """
    The shared domain kernel is self-contained.
    It must not import from adapters, ports, messaging or middleware.
    """
    (
        archrule("shared_domain_isolation")
        .match("giftdesk.shared.domain*")
        .should_not_import("giftdesk.shared.adapters*")
        .should_not_import("giftdesk.shared.ports*")
        .should_not_import("giftdesk.shared.cqrs*")
        .should_not_import("giftdesk.shared.events*")
        .should_not_import("giftdesk.shared.middleware*")
        .should_not_import("sqlalchemy*")
        .check("giftdesk")
    )


def test_primitives_isolation() -> None:
    """
    Primitives are the lowest level and import nothing else from giftdesk.
    """
    (
        archrule("primitives_isolation")
        .match("giftdesk.shared.primitives*")
        .should_not_import("giftdesk.shared.domain*")
        .should_not_import("giftdesk.shared.adapters*")
        .should_not_import("giftdesk.shared.ports*")
        .should_not_import("giftdesk.shared.cqrs*")
        .check("giftdesk")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("giftdesk.shared.ports*")
        .should_not_import("giftdesk.shared.adapters*")
        .should_not_import("sqlalchemy*")
        .check("giftdesk")
    )


def test_core_is_persistence_agnostic() -> None:
    """
    Dispatch, publication and middleware work against ports only.
    """
    (
        archrule("core_persistence_agnostic")
        .match("giftdesk.shared.cqrs*")
        .match("giftdesk.shared.events*")
        .match("giftdesk.shared.middleware*")
        .match("giftdesk.shared.validation*")
        .should_not_import("giftdesk.shared.adapters*")
        .should_not_import("sqlalchemy*")
        .check("giftdesk")
    )


def test_context_domains_are_pure() -> None:
    """
    A context's domain knows nothing of its use cases, its adapters or the
    libraries behind them.
    """
    for context in CONTEXTS:
        (
            archrule(f"{context}_domain_purity")
            .match(f"giftdesk.{context}.domain*")
            .should_not_import(f"giftdesk.{context}.application*")
            .should_not_import(f"giftdesk.{context}.infrastructure*")
            .should_not_import("giftdesk.shared.adapters*")
            .should_not_import("sqlalchemy*")
            .should_not_import("bcrypt*")
            .should_not_import("joserfc*")
            .check("giftdesk")
        )


def test_context_applications_use_ports() -> None:
    """
    Use cases reach persistence, hashing and tokens through ports.
    """
    for context in CONTEXTS:
        (
            archrule(f"{context}_application_layering")
            .match(f"giftdesk.{context}.application*")
            .should_not_import(f"giftdesk.{context}.infrastructure*")
            .should_not_import("giftdesk.shared.adapters*")
            .should_not_import("sqlalchemy*")
            .check("giftdesk")
        )


def test_contexts_do_not_reach_into_each_other() -> None:
    """
    Bounded contexts share only ``giftdesk.shared``.
    """
    for context in CONTEXTS:
        rule = archrule(f"{context}_independence").match(f"giftdesk.{context}*")
        for other in CONTEXTS:
            if other != context:
                rule = rule.should_not_import(f"giftdesk.{other}*")
        rule.check("giftdesk")
