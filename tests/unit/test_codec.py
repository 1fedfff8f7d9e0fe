"""Tests for import key encoding and decoding."""

import json
import re

import pytest
from lzstring import LZString

from particlegen.core.codec import FORMAT_VERSION, decode, decode_partial, encode
from particlegen.core.editor import SelectShapes, apply_edit, build_composition
from particlegen.core.shapes import ShapeRegistry, default_registry
from particlegen.domain import Composition
from particlegen.exceptions import (
    CorruptTokenError,
    DecodeError,
    MalformedPayloadError,
    ParticleGenError,
    UnknownShapeTypeError,
)

URI_SAFE = re.compile(r"[A-Za-z0-9+\-$]*")


@pytest.fixture
def registry() -> ShapeRegistry:
    """Create a registry with the built-in variants."""
    return default_registry()


@pytest.fixture
def composition(registry: ShapeRegistry) -> Composition:
    """Create a composition using every built-in variant."""
    return build_composition(
        registry,
        [
            ("circle", {"count": 7, "radius": 2.345678901, "start": 12.5, "center_x": -1e-7}),
            ("line", {"count": 5, "start_x": 0.1, "end_x": 1 / 3, "end_y": -4}),
            ("polygon", {"sides": 8, "count": 2, "radius": 123456.789}),
            ("circle", {"ellipse": 80, "rotate": 15}),
        ],
    )


def _token(payload: object) -> str:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return LZString().compressToEncodedURIComponent(text)


class TestRoundTrip:
    """Tests for encode/decode round trips."""

    def test_types_order_and_parameters(
        self, composition: Composition, registry: ShapeRegistry
    ) -> None:
        """Test decoding restores types, order and exact parameter values."""
        restored = decode(encode(composition), registry)

        assert len(restored) == len(composition)
        assert [s.shape_type for s in restored] == [s.shape_type for s in composition]
        for original, copy in zip(composition, restored):
            assert dict(copy.parameters) == dict(original.parameters)

    def test_points_regenerated(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test decoded shapes regenerate identical coordinates with new identities."""
        restored = decode(encode(composition), registry)
        for original, copy in zip(composition, restored):
            assert [p.to_tuple() for p in copy.point_set] == [
                p.to_tuple() for p in original.point_set
            ]
            assert copy.id != original.id
        assert [s.name for s in restored] == ["circle_1", "line_1", "polygon_1", "circle_2"]

    def test_flags_not_persisted(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test selection is not part of the token."""
        selected = apply_edit(composition, SelectShapes((composition.shapes[0].id,)), registry)
        assert encode(selected) == encode(composition)

    def test_empty_composition(self, registry: ShapeRegistry) -> None:
        """Test an empty composition round trips."""
        assert len(decode(encode(Composition()), registry)) == 0

    def test_token_alphabet(self, composition: Composition) -> None:
        """Test the token needs no escaping in URLs or file names."""
        token = encode(composition)
        assert token
        assert URI_SAFE.fullmatch(token)

    def test_payload_is_versioned(self, composition: Composition) -> None:
        """Test the compressed payload carries the format version."""
        text = LZString().decompressFromEncodedURIComponent(encode(composition))
        payload = json.loads(text)
        assert payload["version"] == FORMAT_VERSION
        assert payload["shapes"][0] == {
            "type": "circle",
            "parameters": dict(composition.shapes[0].parameters),
        }

    def test_surrounding_whitespace(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test tokens copied with whitespace still decode."""
        assert len(decode(f"  {encode(composition)}\n", registry)) == 4

    def test_legacy_list_payload(self, registry: ShapeRegistry) -> None:
        """Test a bare record list with string parameters decodes."""
        token = _token([{"type": "circle", "parameters": {"count": "6", "radius": "2"}}])
        restored = decode(token, registry)
        assert len(restored.shapes[0].point_set) == 6
        assert restored.shapes[0].parameters["radius"] == 2.0


class TestDecodeErrors:
    """Tests for decode failures."""

    @pytest.mark.parametrize("token", ["", "   ", "!!!not a token###", "#abc"])
    def test_corrupt_token(self, registry: ShapeRegistry, token: str) -> None:
        """Test tokens that cannot be decompressed."""
        with pytest.raises(CorruptTokenError):
            decode(token, registry)

    @pytest.mark.parametrize(
        "payload",
        [
            "not json at all",
            {"version": 1, "shapes": {}},
            {"version": 1},
            {"shapes": []},
            {"version": 99, "shapes": []},
            "42",
            pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
        ],
    )
    def test_malformed_payload(self, registry: ShapeRegistry, payload: object) -> None:
        """Test payloads that are not record lists."""
        with pytest.raises(MalformedPayloadError):
            decode(_token(payload), registry)

    def test_malformed_record(self, registry: ShapeRegistry) -> None:
        """Test a record without a type reports its index."""
        token = _token({"version": 1, "shapes": [{"type": "circle"}, {"parameters": {}}]})
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode(token, registry)
        assert exc_info.value.index == 1

    def test_boolean_parameter(self, registry: ShapeRegistry) -> None:
        """Test JSON booleans are not accepted as numbers."""
        token = _token({"version": 1, "shapes": [{"type": "circle", "parameters": {"count": True}}]})
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode(token, registry)
        assert exc_info.value.index == 0

    def test_oversized_count(self, registry: ShapeRegistry) -> None:
        """Test point counts beyond the cap are rejected before generation."""
        token = _token(
            {"version": 1, "shapes": [{"type": "circle", "parameters": {"count": 1_000_000_000}}]}
        )
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode(token, registry)
        assert exc_info.value.index == 0

    def test_invalid_parameters(self, registry: ShapeRegistry) -> None:
        """Test out-of-domain parameters report the record index."""
        token = _token({"version": 1, "shapes": [{"type": "circle", "parameters": {"count": 0}}]})
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode(token, registry)
        assert exc_info.value.index == 0

    def test_unknown_shape_type(self, registry: ShapeRegistry) -> None:
        """Test unregistered types report type and index."""
        token = _token(
            {
                "version": 1,
                "shapes": [{"type": "circle", "parameters": {}}, {"type": "spiral", "parameters": {}}],
            }
        )
        with pytest.raises(UnknownShapeTypeError) as exc_info:
            decode(token, registry)
        assert exc_info.value.shape_type == "spiral"
        assert exc_info.value.index == 1

    def test_error_kinds_are_distinct_and_recoverable(self) -> None:
        """Test every decode error is a ParticleGenError."""
        kinds = {CorruptTokenError, MalformedPayloadError, UnknownShapeTypeError}
        assert len(kinds) == 3
        for kind in kinds:
            assert issubclass(kind, DecodeError)
            assert issubclass(kind, ParticleGenError)


class TestDecodePartial:
    """Tests for decode_partial."""

    def test_skips_bad_records(self, registry: ShapeRegistry) -> None:
        """Test valid shapes survive while bad records are reported."""
        token = _token(
            {
                "version": 1,
                "shapes": [
                    {"type": "circle", "parameters": {"count": 3}},
                    {"type": "spiral", "parameters": {}},
                    {"type": "line", "parameters": {"count": -1}},
                    "garbage",
                    {"type": "line", "parameters": {"count": 2}},
                ],
            }
        )
        composition, errors = decode_partial(token, registry)

        assert [s.shape_type for s in composition] == ["circle", "line"]
        assert [s.name for s in composition] == ["circle_1", "line_1"]
        assert [type(e) for e in errors] == [
            UnknownShapeTypeError,
            MalformedPayloadError,
            MalformedPayloadError,
        ]
        assert [e.index for e in errors] == [1, 2, 3]  # type: ignore[attr-defined]

    def test_corrupt_token_still_raises(self, registry: ShapeRegistry) -> None:
        """Test token-level failures are not skipped."""
        with pytest.raises(CorruptTokenError):
            decode_partial("###", registry)
