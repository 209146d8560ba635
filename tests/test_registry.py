import threading
import pytest

from typelayout import TypeRegistry, TypeSystemError, Atomic, Struct, Union

from support_modules.test_tools.fixtures import atom, strc, uni


def test_add_atomics(registry):
    registry.register("int", atom(4, 4))
    with pytest.raises(TypeSystemError) as e:
        registry.register("int", atom(4, 4))
    assert e.value == TypeSystemError(TypeSystemError.TYPE_REDEFINITION)

    with pytest.raises(TypeSystemError) as e:
        registry.register("zero", atom(0, 4))
    assert e.value.code == TypeSystemError.NO_ZERO_SIZED_TYPE

    with pytest.raises(TypeSystemError) as e:
        registry.register("zero", atom(4, 0))
    assert e.value.code == TypeSystemError.NO_ZERO_ALIGN

    assert registry.names() == ["int"]


def test_zero_size_checked_before_zero_align(registry):
    with pytest.raises(TypeSystemError) as e:
        registry.register("zero", atom(0, 0))
    assert e.value.code == TypeSystemError.NO_ZERO_SIZED_TYPE


def test_redefinition_checked_first(registry):
    registry.register("int", atom(4, 4))
    for variant in [atom(0, 0), strc(), uni("missing")]:
        with pytest.raises(TypeSystemError) as e:
            registry.register("int", variant)
        assert e.value.code == TypeSystemError.TYPE_REDEFINITION
    assert registry.lookup("int") == atom(4, 4)


def test_add_compound(registry):
    registry.register("int", atom(4, 4))
    registry.register("char", atom(2, 4))

    with pytest.raises(TypeSystemError) as e:
        registry.register("s", strc("int", "foo"))
    assert e.value == TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, "foo")

    for variant in [uni(), strc()]:
        with pytest.raises(TypeSystemError) as e:
            registry.register("s", variant)
        assert e.value.code == TypeSystemError.EMPTY_COMPOUND_TYPE

    registry.register("s", strc("int"))
    registry.register("u", uni("s", "s", "int"))
    assert len(registry) == 4


def test_first_missing_name_is_reported(registry):
    registry.register("int", atom(4, 4))
    with pytest.raises(TypeSystemError) as e:
        registry.register("s", strc("int", "bar", "foo", "bar"))
    assert e.value.name == "bar"

    with pytest.raises(TypeSystemError) as e:
        registry.register("u", uni("foo", "int"))
    assert e.value.name == "foo"


def test_no_self_reference(registry):
    registry.register("int", atom(4, 4))
    with pytest.raises(TypeSystemError) as e:
        registry.register("node", strc("int", "node"))
    assert e.value == TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, "node")
    assert "node" not in registry


def test_failure_leaves_registry_unchanged(samples):
    before = samples.names()
    for name, variant in [
        ("int", atom(1, 1)),
        ("z", atom(0, 1)),
        ("z", atom(1, 0)),
        ("z", strc()),
        ("z", uni("int", "nope")),
    ]:
        with pytest.raises(TypeSystemError):
            samples.register(name, variant)
    assert samples.names() == before
    assert samples.lookup("int") == Atomic(4, 4)


def test_not_a_variant(registry):
    with pytest.raises(TypeError):
        registry.register("int", (4, 4))
    assert len(registry) == 0


def test_lookup(samples):
    assert samples.lookup("s2") == Struct(["char", "int"])
    assert samples.lookup("u1") == Union(("int", "int"))
    assert samples.lookup("nothing") is None
    assert samples.lookup("s2") is samples.lookup("s2")


def test_resolve(samples):
    assert samples.resolve("int") == Atomic(4, 4)
    with pytest.raises(TypeSystemError) as e:
        samples.resolve("nothing")
    assert e.value == TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, "nothing")


def test_container_protocol(samples):
    assert "s1" in samples
    assert "s3" not in samples
    assert len(samples) == 6
    assert list(samples) == ["int", "char", "s1", "s2", "u1", "u2"]


def test_variants_are_immutable():
    members = ["int", "char"]
    struct = Struct(members)
    members.append("int")
    assert struct.members == ("int", "char")
    with pytest.raises(AttributeError):
        struct.members = ("int",)
    assert hash(Struct(["a", "b"])) == hash(Struct(("a", "b")))


def test_describe(samples):
    text = samples.describe("s2")
    assert text.splitlines()[:2] == ["Symbol: s2", "Struct:"]
    assert "      + Ordering: int, char" in text

    with pytest.raises(TypeSystemError) as e:
        samples.describe("nothing")
    assert e.value.code == TypeSystemError.TYPE_DOES_NOT_EXIST


def test_error_messages():
    assert str(TypeSystemError(TypeSystemError.TYPE_REDEFINITION)) == \
        "[TYPE_REDEFINITION] An existing type cannot be redefined"
    assert str(TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, "foo")) == \
        "[TYPE_DOES_NOT_EXIST] The symbol does not exist: 'foo'"
    assert "unexpected" in str(TypeSystemError(42))


def test_concurrent_registration_of_one_name():
    registry = TypeRegistry()
    barrier = threading.Barrier(8)
    winners = []
    losers = []

    def attempt(i):
        barrier.wait()
        try:
            registry.register("shared", Atomic(i + 1, 1))
            winners.append(i)
        except TypeSystemError as e:
            losers.append(e.code)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(winners) == 1
    assert losers == [TypeSystemError.TYPE_REDEFINITION] * 7
    assert registry.lookup("shared") == Atomic(winners[0] + 1, 1)


@pytest.mark.parametrize("variant", [atom(2.5, 1), atom(4, 4.0), atom(True, 1), atom("4", 4)])
def test_atomic_values_must_be_integers(registry, variant):
    with pytest.raises(TypeError):
        registry.register("f", variant)
    assert "f" not in registry
