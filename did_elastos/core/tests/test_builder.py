import pytest

from did_elastos.core.did import DID
from did_elastos.core.did_url import DIDUrl
from did_elastos.core.errors import (
    DIDUrlSyntaxError,
    IllegalArgumentError,
    InvalidHexError,
    MalformedDIDUrlError,
    UnsupportedMethodError,
)

TEST_DID = "did:elastos:icJ4z2DULrHEzYSvjKNJpKyhqFDxvYV7pN"
TEST_URL = (
    TEST_DID
    + ";elastos:foo=testvalue;bar=123;keyonly"
    + "/path/to/the/resource"
    + "?qkey=qvalue&qkeyonly&test=true"
    + "#testfragment"
)


@pytest.fixture
def did() -> DID:
    return DID.decode(TEST_DID)


def test_build_from_did(did: DID):
    url = (
        DIDUrl.Builder(did)
        .set_path("/a/b")
        .set_query_parameter("k", "v")
        .set_query_parameter("flag")
        .set_fragment("f")
        .build()
    )
    assert str(url) == TEST_DID + "/a/b?k=v&flag#f"
    assert url.did == did
    assert not url.is_relative
    assert DIDUrl.decode(str(url)) == url


def test_build_from_url():
    url = DIDUrl.decode(TEST_URL)
    copy = DIDUrl.builder(url).build()
    assert copy == url
    assert copy is not url

    updated = DIDUrl.Builder(url).set_query_parameter("qkey", "new").build()
    assert updated.query_string == "qkey=new&qkeyonly&test=true"
    assert url.get_query_parameter("qkey") == "qvalue"


def test_build_from_string():
    assert DIDUrl.Builder(TEST_URL).build() == TEST_URL
    with pytest.raises(MalformedDIDUrlError):
        DIDUrl.Builder(TEST_DID + "#")
    with pytest.raises(IllegalArgumentError):
        DIDUrl.Builder(123)


def test_build_from_relative_url(did: DID):
    url = DIDUrl.decode("#key-1", did)
    built = DIDUrl.Builder(url).set_fragment("key-2").build()
    assert str(built) == TEST_DID + "#key-2"


def test_builder_reusable(did: DID):
    builder = DIDUrl.Builder(did).set_fragment("a").set_query_parameter("x", "1")
    first = builder.build()
    builder.set_fragment("b").set_query_parameter("x", "2")
    second = builder.build()
    assert first.fragment == "a"
    assert first.get_query_parameter("x") == "1"
    assert second.fragment == "b"
    assert second.get_query_parameter("x") == "2"


def test_parameters(did: DID):
    builder = DIDUrl.Builder(did)
    builder.set_parameter("elastos:foo", "bar").set_parameter("keyonly")
    assert builder.build().parameters_string == "elastos:foo=bar;keyonly"

    builder.set_parameter("elastos:foo", "baz")
    assert builder.build().parameters_string == "elastos:foo=baz;keyonly"

    builder.remove_parameter("elastos:foo")
    assert builder.build().parameters_string == "keyonly"

    builder.set_parameters({"a": "1", "b": None})
    assert builder.build().parameters_string == "a=1;b"

    builder.clear_parameters()
    assert builder.build().parameters_string is None

    with pytest.raises(DIDUrlSyntaxError):
        builder.set_parameter("a:b:c")
    with pytest.raises(IllegalArgumentError):
        builder.set_parameter("")
    with pytest.raises(IllegalArgumentError):
        builder.remove_parameter(None)


def test_query(did: DID):
    builder = DIDUrl.Builder(did)
    builder.set_query_parameters({"a": "1", "b": None, "c": "3"})
    assert builder.build().query_string == "a=1&b&c=3"

    builder.remove_query_parameter("b")
    assert builder.build().query_string == "a=1&c=3"

    builder.clear_query_parameters()
    assert builder.build().query_string is None

    with pytest.raises(IllegalArgumentError):
        builder.set_query_parameter("", "x")
    with pytest.raises(DIDUrlSyntaxError) as exc:
        builder.set_query_parameter("k", "a b")
    assert exc.value.position == 1
    with pytest.raises(DIDUrlSyntaxError):
        builder.set_query_parameters({"k": "v", "k&x": "v"})
    # a rejected update leaves the previous state untouched
    assert builder.build().query_string is None


def test_path(did: DID):
    builder = DIDUrl.Builder(did)
    assert builder.set_path("a/b").build().path == "a/b"
    assert builder.set_path("/a/b").build().path == "a/b"
    assert builder.clear_path().build().path is None

    with pytest.raises(DIDUrlSyntaxError):
        builder.set_path("a//b")
    with pytest.raises(DIDUrlSyntaxError):
        builder.set_path("a?b")
    with pytest.raises(IllegalArgumentError):
        builder.set_path("")


def test_fragment(did: DID):
    builder = DIDUrl.Builder(did)
    assert builder.set_fragment("key-1").build().fragment == "key-1"
    assert builder.clear_fragment().build().fragment is None

    with pytest.raises(DIDUrlSyntaxError) as exc:
        builder.set_fragment("-x")
    assert exc.value.position == 0
    with pytest.raises(InvalidHexError):
        builder.set_fragment("%zz")
    with pytest.raises(DIDUrlSyntaxError):
        builder.set_fragment("#key")


def test_did(did: DID):
    builder = DIDUrl.Builder().set_fragment("key")
    assert str(builder.build()) == "#key"
    assert builder.build().is_relative

    builder.set_did(TEST_DID)
    assert str(builder.build()) == TEST_DID + "#key"

    builder.clear_did().set_did(did)
    assert builder.build().did == did

    with pytest.raises(UnsupportedMethodError):
        builder.set_did("did:example:1234")
    with pytest.raises(IllegalArgumentError):
        builder.set_did(None)

    assert str(builder.clear_did().build()) == "#key"


def test_build_empty():
    with pytest.raises(IllegalArgumentError):
        DIDUrl.Builder().build()


def test_invalid_did():
    with pytest.raises(UnsupportedMethodError):
        DIDUrl.Builder().set_did(DID("example", "1234"))
    with pytest.raises(DIDUrlSyntaxError):
        DIDUrl.Builder(DID("elastos", "a b"))
