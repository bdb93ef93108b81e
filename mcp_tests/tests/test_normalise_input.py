import io

import pytest

from core.errors import UnexpectedInputAbsent, UnexpectedInputError, UnexpectedInputUnrecognized
from core.models import FileRecord
from normalise.input import normalise_input, to_file_record


def tag(content):
    # Content normaliser that marks what it was given
    return ("normalised", content)


async def atag(content):
    return ("normalised", content)


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["hello", b"bytes", bytearray(b"ba")])
async def test_text_and_bytes_produce_one_record(value, collect):
    out = await collect(normalise_input(value, tag))

    assert len(out) == 1
    assert out[0].path == ""
    assert out[0].content == ("normalised", value)
    assert out[0].mode is None and out[0].mtime is None


@pytest.mark.asyncio
async def test_blob_produces_one_record(collect):
    blob = io.BytesIO(b"data")

    out = await collect(normalise_input(blob, tag))

    assert len(out) == 1
    assert out[0].content == ("normalised", blob)
    # an open file's own `mode` is not file metadata
    assert out[0].mode is None


@pytest.mark.asyncio
async def test_none_input_raises_absent(collect):
    with pytest.raises(UnexpectedInputAbsent) as exc:
        await collect(normalise_input(None, tag))

    assert exc.value.code == "ERR_UNEXPECTED_INPUT"


@pytest.mark.asyncio
async def test_empty_sequence_yields_nothing(agen, collect):
    assert await collect(normalise_input([], tag)) == []
    assert await collect(normalise_input(agen([]), tag)) == []


@pytest.mark.asyncio
async def test_integer_sequence_is_single_byte_stream(collect):
    out = await collect(normalise_input([1, 2, 3], lambda c: c))

    assert len(out) == 1
    assert out[0].path == ""
    assert list(out[0].content) == [1, 2, 3]


@pytest.mark.asyncio
async def test_async_bytes_sequence_is_single_byte_stream(agen, collect):
    out = await collect(normalise_input(agen([b"a", b"b"]), lambda c: c))

    assert len(out) == 1
    assert await collect(out[0].content) == [b"a", b"b"]


@pytest.mark.asyncio
async def test_sequence_of_records_maps_one_to_one(collect):
    records = [{"path": "a", "content": "x"}, {"path": "b", "content": "y"}]

    out = await collect(normalise_input(records, tag))

    assert [r.path for r in out] == ["a", "b"]
    assert [r.content for r in out] == [("normalised", "x"), ("normalised", "y")]


@pytest.mark.asyncio
async def test_async_callback_is_awaited(agen, collect):
    out = await collect(normalise_input(agen([{"path": "a", "content": "x"}]), atag))

    assert out == [FileRecord(path="a", content=("normalised", "x"))]


@pytest.mark.asyncio
async def test_directory_marker_has_no_content(collect):
    out = await collect(normalise_input({"path": "dir"}, tag))

    assert len(out) == 1
    assert out[0].path == "dir"
    assert out[0].content is None
    assert out[0].is_directory
    assert "content" not in out[0].to_dict()


@pytest.mark.asyncio
async def test_mode_and_mtime_pass_through_verbatim(collect):
    mtime = {"secs": 5, "nsecs": 7}

    out = await collect(normalise_input({"path": "f", "content": b"x", "mode": "0644", "mtime": mtime}, tag))

    assert out[0].mode == "0644"
    assert out[0].mtime is mtime


@pytest.mark.asyncio
async def test_sequence_of_strings_is_one_record_each(collect):
    out = await collect(normalise_input(["one", "two"], tag))

    assert [r.content for r in out] == [("normalised", "one"), ("normalised", "two")]
    assert all(r.path == "" for r in out)


@pytest.mark.asyncio
async def test_nested_sequences_become_one_record_each(collect):
    out = await collect(normalise_input([[1, 2], [3, 4]], lambda c: list(c)))

    assert len(out) == 2
    assert [r.content for r in out] == [[1, 2], [3, 4]]


@pytest.mark.asyncio
async def test_sequence_of_pull_streams(make_pull_stream, collect):
    streams = [make_pull_stream([b"a"]), make_pull_stream([b"b"])]

    out = await collect(normalise_input(streams, tag))

    assert [r.content for r in out] == [("normalised", s) for s in streams]


@pytest.mark.asyncio
async def test_pull_stream_of_records(make_pull_stream, collect):
    stream = make_pull_stream([{"path": "a", "content": "x"}, {"path": "b"}])

    out = await collect(normalise_input(stream, tag))

    assert [r.path for r in out] == ["a", "b"]
    assert out[1].content is None
    assert stream.reader.released is True


@pytest.mark.asyncio
async def test_pull_stream_of_bytes_hands_stream_to_content(make_pull_stream, collect):
    stream = make_pull_stream([b"a", b"b"])

    out = await collect(normalise_input(stream, lambda c: c))

    assert len(out) == 1
    assert await collect(out[0].content) == [b"a", b"b"]


@pytest.mark.asyncio
async def test_early_stop_releases_acquired_pull_stream(make_pull_stream):
    stream = make_pull_stream([{"path": "a"}, {"path": "b"}, {"path": "c"}])
    gen = normalise_input(stream, tag)

    first = await gen.__anext__()
    await gen.aclose()

    assert first.path == "a"
    assert stream.reader.cancelled is True
    assert stream.reader.released is True


@pytest.mark.asyncio
async def test_failing_callback_releases_acquired_pull_stream(make_pull_stream, collect):
    stream = make_pull_stream([b"a", b"b"])

    def boom(_):
        raise KeyError("callback")

    with pytest.raises(KeyError):
        await collect(normalise_input(stream, boom))

    assert stream.reader.cancelled is True
    assert stream.reader.released is True


@pytest.mark.asyncio
async def test_records_are_produced_on_demand():
    pulled = []

    async def source():
        for name in ["a", "b", "c"]:
            pulled.append(name)
            yield {"path": name, "content": name}

    gen = normalise_input(source(), tag)
    await gen.__anext__()

    assert pulled == ["a"]
    await gen.aclose()


@pytest.mark.asyncio
async def test_iterable_with_path_is_treated_as_sequence(collect):
    class StreamWithPath:
        path = "/tmp/stream"

        def __iter__(self):
            return iter([b"a", b"b"])

    out = await collect(normalise_input(StreamWithPath(), lambda c: list(c)))

    assert len(out) == 1
    assert out[0].path == ""
    assert out[0].content == [b"a", b"b"]


@pytest.mark.asyncio
async def test_iterable_of_unknown_falls_back_to_file_object(collect):
    class Odd:
        path = "odd"

        def __iter__(self):
            return iter([object()])

    out = await collect(normalise_input(Odd(), tag))

    assert out == [FileRecord(path="odd")]


@pytest.mark.asyncio
async def test_unrecognized_input_names_type(collect):
    with pytest.raises(UnexpectedInputUnrecognized) as exc:
        await collect(normalise_input(42, tag))

    assert "int" in str(exc.value)
    assert exc.value.type_name == "int"


@pytest.mark.asyncio
async def test_sequence_of_unrecognized_raises(collect):
    with pytest.raises(UnexpectedInputError):
        await collect(normalise_input([{"name": "a"}], tag))


@pytest.mark.asyncio
async def test_none_element_inside_record_sequence_raises(collect):
    with pytest.raises(UnexpectedInputAbsent):
        await collect(normalise_input([{"path": "a"}, None], tag))


@pytest.mark.asyncio
async def test_callback_errors_propagate_unchanged(collect):
    def boom(_):
        raise KeyError("callback")

    with pytest.raises(KeyError):
        await collect(normalise_input("x", boom))


@pytest.mark.asyncio
async def test_source_error_keeps_earlier_records():
    async def source():
        yield {"path": "a", "content": "x"}
        raise OSError("disk gone")

    gen = normalise_input(source(), tag)
    first = await gen.__anext__()

    assert first.path == "a"
    with pytest.raises(OSError):
        await gen.__anext__()


@pytest.mark.asyncio
async def test_to_file_record_content_rules():
    assert await to_file_record({"path": "p", "content": "c"}, tag) == FileRecord(path="p", content=("normalised", "c"))
    assert await to_file_record({"path": "p"}, tag) == FileRecord(path="p")
    # empty text content on a path is a directory marker
    assert await to_file_record({"path": "p", "content": ""}, tag) == FileRecord(path="p")
    # empty bytes are still a (zero length) file
    assert await to_file_record({"path": "p", "content": b""}, tag) == FileRecord(path="p", content=("normalised", b""))
    # no path at all: the whole value is content
    assert await to_file_record("raw", tag) == FileRecord(content=("normalised", "raw"))
