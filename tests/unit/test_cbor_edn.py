"""Unit tests for the CBOR and EDN wrappers applied to Sign1 envelopes."""

import cbor2
import pytest

from dgc_cose import Sign1Message, cbor_utils, edn_utils


class TestCborUtils:
    """Test cases for the cbor2 wrapper."""

    @pytest.mark.unit
    def test_tag_helpers(self):
        tag = cbor_utils.create_tag(cbor_utils.COSE_SIGN1_TAG, [b"", {}, b"", b""])

        assert cbor_utils.is_tag(tag)
        assert cbor_utils.is_tag(tag, 18)
        assert not cbor_utils.is_tag(tag, 98)
        assert not cbor_utils.is_tag([1, 2])
        assert cbor_utils.get_tag_number(tag) == 18
        assert cbor_utils.get_tag_value(tag) == [b"", {}, b"", b""]

    @pytest.mark.unit
    def test_encode_tagged_array(self):
        encoded = cbor_utils.encode(cbor_utils.create_tag(18, [b"\xa0", {}, b"P", b"S"]))

        # 0xd2 = tag(18), 0x84 = array(4)
        assert encoded[:2] == b"\xd2\x84"
        assert list(cbor2.loads(encoded).value) == [b"\xa0", {}, b"P", b"S"]

    @pytest.mark.unit
    def test_canonical_map_ordering(self):
        assert cbor_utils.encode({4: b"\x00", 1: -7}, canonical=True) == bytes.fromhex("a201260441" + "00")

    @pytest.mark.unit
    def test_byte_string_and_text_are_distinct(self):
        assert cbor_utils.encode(b"HELLO")[0] == 0x45
        assert cbor_utils.encode("HELLO")[0] == 0x65

    @pytest.mark.unit
    def test_decode_error(self):
        # array(4) header followed by a single element
        with pytest.raises(cbor_utils.CBORDecodeError):
            cbor_utils.decode(b"\x84\x01")

    @pytest.mark.unit
    def test_decode_rejects_trailing_data(self):
        with pytest.raises(cbor_utils.CBORDecodeError):
            cbor_utils.decode(cbor2.dumps([1, 2]) + b"\x00")

    @pytest.mark.unit
    def test_decode_tagged_array_as_sequence(self):
        decoded = cbor_utils.decode(cbor2.dumps(cbor2.CBORTag(18, [b"", {}, b"", b""])))

        assert cbor_utils.is_tag(decoded, cbor_utils.COSE_SIGN1_TAG)
        assert list(cbor_utils.get_tag_value(decoded)) == [b"", {}, b"", b""]


class TestDiagnosticNotation:
    """Test cases for EDN rendering."""

    @pytest.mark.unit
    @pytest.mark.requires_crypto
    def test_message_to_diagnostic(self, ec_private_key):
        message = Sign1Message(b"HELLO")
        message.sign(ec_private_key, "AAEC")

        edn = message.to_diagnostic()

        assert isinstance(edn, str)
        assert "18(" in edn
        # Protected header {1: -7, 4: h'000102'}
        assert "a201260443000102" in edn.lower()

    @pytest.mark.unit
    @pytest.mark.requires_crypto
    def test_diagnostic_round_trip(self, ec_private_key):
        message = Sign1Message(b"HELLO")
        message.sign(ec_private_key, "AAEC")
        encoded = message.encode()

        restored = edn_utils.diag_to_cbor(edn_utils.cbor_to_diag(encoded))

        assert cbor2.loads(restored) == cbor2.loads(encoded)
