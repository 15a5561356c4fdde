import io
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

import vardump
from vardump.api import (
    Dumper,
    DumperConfig,
    create_dumper,
    dump,
    iter_dump,
    sdump,
)


@dataclass
class Person:
    Name: str
    Age: int


PERSON_DUMP = (
    f"({Person.__module__}.Person)\n"
    "  Name(str) 'Al'\n"
    "  Age(int) 30\n"
)


class TestSdump:
    def test_record(self):
        assert sdump(Person("Al", 30)) == PERSON_DUMP

    def test_slice_of_ints(self):
        assert sdump([1, 2]) == "(list)\n  0(int) 1\n  1(int) 2\n"

    def test_none_still_produces_output(self):
        assert sdump(None) == "(NoneType) None\n"

    def test_idempotent(self):
        value = {"people": [Person("Al", 30)], "count": 1}
        assert sdump(value) == sdump(value)

    def test_concurrent_calls_do_not_share_state(self):
        values = [[i, {"n": i}] for i in range(50)]
        expected = [sdump(v) for v in values]
        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(sdump, values)) == expected


class TestIterDump:
    def test_lines_join_to_sdump(self):
        value = {"a": [1, 2], "b": Person("Al", 30)}
        lines = list(iter_dump(value))
        assert "".join(lines) == sdump(value)
        assert all(line.endswith("\n") for line in lines)

    def test_lazy(self):
        lines = iter_dump([1, 2, 3])
        assert next(lines) == "(list)\n"
        assert next(lines) == "  0(int) 1\n"


class TestDump:
    def test_writes_to_stdout(self, capsys):
        dump(Person("Al", 30))
        assert capsys.readouterr().out == PERSON_DUMP

    def test_writes_to_file(self):
        buffer = io.StringIO()
        dump([1], file=buffer)
        assert buffer.getvalue() == "(list)\n  0(int) 1\n"


class TestDumper:
    def test_default_config(self):
        dumper = Dumper()
        assert dumper.config.stream is None
        assert dumper.config.flush is False

    def test_flushes_when_configured(self):
        stream = MagicMock()
        Dumper(DumperConfig(stream=stream, flush=True)).dump(1)
        stream.write.assert_called_once_with("(int) 1\n")
        stream.flush.assert_called_once()

    def test_rejects_unwritable_stream(self):
        with pytest.raises(TypeError):
            Dumper(DumperConfig(stream=42))

    def test_create_dumper(self):
        buffer = io.StringIO()
        dumper = create_dumper(stream=buffer)
        dumper.dump("x")
        dumper.dump("y")
        assert buffer.getvalue() == "(str) 'x'\n(str) 'y'\n"
        assert dumper.sdump("z") == "(str) 'z'\n"


class TestPackage:
    def test_lazy_exports(self):
        assert vardump.sdump is sdump
        assert vardump.Dumper is Dumper
        assert vardump.Shape.SCALAR.value == "scalar"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            vardump.nonexistent

    def test_dir_lists_exports(self):
        assert "dump" in dir(vardump)
        assert "type_descriptor" in dir(vardump)


if __name__ == "__main__":
    pytest.main()
