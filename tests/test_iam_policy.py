"""Unit tests for the generic IamPolicy and its builder.

These tests use two minimal string-keyed policy classes and never touch the network.
"""

import pytest

from pdum.iam.types import IamPolicy, Identity, InvalidArgumentError

ALL_USERS = Identity.all_users()
ALL_AUTH_USERS = Identity.all_authenticated_users()
USER = Identity.user("abc@gmail.com")
SERVICE_ACCOUNT = Identity.service_account("service-account@gmail.com")
GROUP = Identity.group("group@gmail.com")
DOMAIN = Identity.domain("google.com")

BINDINGS = {
    "viewer": {USER, SERVICE_ACCOUNT, ALL_USERS},
    "editor": {ALL_AUTH_USERS, GROUP, DOMAIN},
}


class StringPolicy(IamPolicy[str]):
    class Builder(IamPolicy.Builder[str, "StringPolicy.Builder"]):
        def build(self):
            return StringPolicy(self)

    @classmethod
    def builder(cls):
        return cls.Builder()

    def to_builder(self):
        return StringPolicy.Builder(self.bindings, self.etag, self.version)


class AnotherStringPolicy(IamPolicy[str]):
    class Builder(IamPolicy.Builder[str, "AnotherStringPolicy.Builder"]):
        def build(self):
            return AnotherStringPolicy(self)

    def to_builder(self):
        return AnotherStringPolicy.Builder()


SIMPLE_POLICY = (
    StringPolicy.builder()
    .add_identity("viewer", USER, SERVICE_ACCOUNT, ALL_USERS)
    .add_identity("editor", ALL_AUTH_USERS, GROUP, DOMAIN)
    .build()
)
FULL_POLICY = StringPolicy.Builder(SIMPLE_POLICY.bindings, "etag", 1).build()


def test_builder():
    assert FULL_POLICY.bindings == BINDINGS
    assert FULL_POLICY.etag == "etag"
    assert FULL_POLICY.version == 1

    editor_binding = {"editor": BINDINGS["editor"]}
    policy = FULL_POLICY.to_builder().set_bindings(editor_binding).build()
    assert policy.bindings == editor_binding
    assert policy.etag == "etag"
    assert policy.version == 1

    policy = SIMPLE_POLICY.to_builder().remove_role("editor").build()
    assert policy.bindings == {"viewer": BINDINGS["viewer"]}
    assert policy.etag is None
    assert policy.version is None

    policy = policy.to_builder().remove_identity("viewer", USER, ALL_USERS).add_identity("viewer", DOMAIN, GROUP).build()
    assert policy.bindings == {"viewer": {SERVICE_ACCOUNT, DOMAIN, GROUP}}

    policy = (
        StringPolicy.builder()
        .remove_identity("viewer", USER)
        .add_identity("owner", USER, SERVICE_ACCOUNT)
        .add_identity("editor", GROUP)
        .remove_identity("editor", GROUP)
        .build()
    )
    assert policy.bindings == {"owner": {USER, SERVICE_ACCOUNT}}
    assert policy.etag is None
    assert policy.version is None


def test_add_identity_is_idempotent():
    builder = StringPolicy.builder().add_identity("viewer", USER)
    once = builder.build()
    twice = builder.add_identity("viewer", USER).build()
    assert len(twice.bindings["viewer"]) == len(once.bindings["viewer"]) == 1
    assert once == twice


def test_removing_last_identity_removes_role():
    policy = StringPolicy.builder().add_identity("viewer", USER).remove_identity("viewer", USER).build()
    assert "viewer" not in policy.bindings
    assert len(policy.bindings) == 0


def test_remove_unknown_role_or_identity_is_noop():
    builder = StringPolicy.builder().add_identity("viewer", USER)
    builder.remove_identity("editor", USER).remove_identity("viewer", GROUP).remove_role("owner")
    assert builder.build().bindings == {"viewer": {USER}}


def test_set_bindings_drops_empty_sets():
    policy = StringPolicy.builder().set_bindings({"viewer": {USER}, "editor": set()}).build()
    assert policy.bindings == {"viewer": {USER}}


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda: StringPolicy.builder().add_identity(None, USER), "The role cannot be None."),
        (lambda: StringPolicy.builder().add_identity("viewer", None, USER), "None identities are not permitted."),
        (lambda: StringPolicy.builder().add_identity("viewer", USER, None), "None identities are not permitted."),
        (lambda: StringPolicy.builder().set_bindings(None), "The provided map of bindings cannot be None."),
        (
            lambda: StringPolicy.builder().set_bindings({"viewer": None}),
            "A role cannot be assigned to a None set of identities.",
        ),
        (lambda: StringPolicy.builder().set_bindings({"viewer": {None}}), "None identities are not permitted."),
        (lambda: StringPolicy.builder().set_bindings({None: {USER}}), "The role cannot be None."),
    ],
)
def test_illegal_arguments(call, message):
    with pytest.raises(InvalidArgumentError) as exc_info:
        call()
    assert str(exc_info.value) == message


def test_invalid_argument_error_is_value_error():
    with pytest.raises(ValueError):
        StringPolicy.builder().add_identity(None, USER)


def test_rejected_add_identity_leaves_builder_unchanged():
    builder = StringPolicy.builder().add_identity("viewer", USER)
    with pytest.raises(InvalidArgumentError):
        builder.add_identity("viewer", GROUP, None)
    with pytest.raises(InvalidArgumentError):
        builder.add_identity("editor", GROUP, None)
    assert builder.build().bindings == {"viewer": {USER}}


def test_rejected_set_bindings_leaves_builder_unchanged():
    builder = SIMPLE_POLICY.to_builder()
    with pytest.raises(InvalidArgumentError):
        builder.set_bindings({"owner": {USER}, "viewer": None})
    assert builder.build() == SIMPLE_POLICY


def test_equals_hash():
    empty_policy = StringPolicy.builder().build()
    another_policy = AnotherStringPolicy.Builder().build()
    assert empty_policy != another_policy
    assert hash(empty_policy) != hash(another_policy)
    assert FULL_POLICY != SIMPLE_POLICY
    assert hash(FULL_POLICY) != hash(SIMPLE_POLICY)

    copy = SIMPLE_POLICY.to_builder().build()
    assert copy == SIMPLE_POLICY
    assert hash(copy) == hash(SIMPLE_POLICY)
    assert copy is not SIMPLE_POLICY


def test_bindings():
    assert len(StringPolicy.builder().build().bindings) == 0
    assert SIMPLE_POLICY.bindings == BINDINGS


def test_etag_and_version():
    assert SIMPLE_POLICY.etag is None
    assert SIMPLE_POLICY.version is None
    assert FULL_POLICY.etag == "etag"
    assert FULL_POLICY.version == 1

    cleared = FULL_POLICY.to_builder().set_etag(None).set_version(None).build()
    assert cleared == SIMPLE_POLICY


def test_bindings_snapshot_is_read_only():
    with pytest.raises(TypeError):
        SIMPLE_POLICY.bindings["owner"] = frozenset({USER})  # type: ignore[index]
    assert isinstance(SIMPLE_POLICY.bindings["viewer"], frozenset)


def test_to_builder_isolates_original():
    builder = FULL_POLICY.to_builder()
    builder.add_identity("viewer", GROUP).remove_identity("editor", DOMAIN).set_etag("other").set_version(3)
    builder.add_identity("owner", USER)

    assert FULL_POLICY.bindings == BINDINGS
    assert FULL_POLICY.etag == "etag"
    assert FULL_POLICY.version == 1


def test_build_isolates_from_later_builder_use():
    builder = StringPolicy.builder().add_identity("viewer", USER)
    first = builder.build()
    builder.add_identity("viewer", GROUP).add_identity("editor", DOMAIN)

    assert first.bindings == {"viewer": {USER}}


def test_set_bindings_copies_caller_sets():
    identities = {USER}
    builder = StringPolicy.builder().set_bindings({"viewer": identities})
    identities.add(GROUP)
    assert builder.build().bindings == {"viewer": {USER}}


def test_set_bindings_accepts_one_pass_iterables():
    policy = StringPolicy.builder().set_bindings({"viewer": (i for i in [USER, GROUP])}).build()
    assert policy.bindings == {"viewer": {USER, GROUP}}


def test_set_bindings_rejects_none_inside_generator():
    builder = StringPolicy.builder().add_identity("viewer", USER)
    with pytest.raises(InvalidArgumentError, match="None identities are not permitted."):
        builder.set_bindings({"editor": (i for i in [GROUP, None])})
    assert builder.build().bindings == {"viewer": {USER}}
