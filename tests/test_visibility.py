from __future__ import annotations

import importlib.util
import textwrap

import pytest

from telemetry_wrappers import DefinitionError, deftimed, deftimedp


def _load(src: str, exports) -> dict:
    g: dict = {"__name__": "fake_module", "deftimed": deftimed, "deftimedp": deftimedp}
    if exports is not None:
        g["__all__"] = exports
    exec(textwrap.dedent(src), g)
    return g


def test_deftimed_adds_to_existing_all(recorder):
    g = _load(
        """
        @deftimed(["a", "b"])
        def timed_function(a, b):
            return a + b

        @deftimed
        def timed_function2(a, b):
            return a + b
        """,
        ["helper"],
    )
    assert g["__all__"] == ["helper", "timed_function", "timed_function2"]
    assert g["timed_function"](1, 2) == 3
    assert g["timed_function2"](1, 2) == 3
    assert [e.channel for e in recorder.events] == [("a", "b"), ("timing", "timed_function2")]


def test_deftimed_does_not_duplicate_or_create_all():
    g = _load(
        """
        @deftimed
        def listed():
            return 1
        """,
        ("listed",),
    )
    assert g["__all__"] == ("listed",)

    g = _load(
        """
        @deftimed
        def free():
            return 1
        """,
        None,
    )
    assert "__all__" not in g


def test_deftimedp_keeps_name_out_of_all(recorder):
    g = _load(
        """
        def invoke_private(a):
            return _private_fun(a)

        @deftimedp(["something"])
        def _private_fun(a):
            return a
        """,
        ["invoke_private", "_private_fun"],
    )
    assert g["__all__"] == ["invoke_private"]
    assert g["invoke_private"](15) == 15
    assert recorder.events[0].channel == ("something",)


def test_deftimedp_public_name_fails_when_module_loads():
    with pytest.raises(DefinitionError):
        _load(
            """
            @deftimedp
            def exposed():
                return 1
            """,
            [],
        )


def test_all_is_maintained_in_an_imported_module_file(tmp_path, recorder):
    path = tmp_path / "timed_module.py"
    path.write_text(
        textwrap.dedent(
            """
            from telemetry_wrappers import deftimed, deftimedp

            __all__ = ["_hidden"]

            @deftimed
            def exported():
                return _hidden()

            @deftimedp(["hidden"])
            def _hidden():
                return "h"
            """
        )
    )
    spec = importlib.util.spec_from_file_location("timed_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    assert module.__all__ == ["exported"]
    assert module.exported() == "h"
    assert [e.channel for e in recorder.events] == [("hidden",), ("timing", "exported")]
