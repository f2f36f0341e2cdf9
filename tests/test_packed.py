"""Tests for the packed legacy field types."""

import pytest

from cellanim.errors import EditableFormError, FieldRangeError
from cellanim.utils import get_counts
from cellanim.utils.binary import ByteOrder
from cellanim.utils.packed import HighByteFlag, HighHalfSelect, PackedXY


class TestPackedXY:

    def test_x_is_upper_half(self):
        assert PackedXY(x=-1, y=2).pack() == 0xFFFF0002
        assert PackedXY.unpack(0x00030004) == PackedXY(x=3, y=4)

    @pytest.mark.parametrize("order", [ByteOrder.LITTLE, ByteOrder.BIG])
    @pytest.mark.parametrize("x,y", [(0, 0), (-1, 2), (-32768, 32767), (512, -512)])
    def test_bytes_keep_both_values(self, order, x, y):
        data = PackedXY(x=x, y=y).to_bytes(order)
        assert len(data) == 4
        assert PackedXY.from_bytes(data, order) == PackedXY(x=x, y=y)

    def test_big_endian_bytes(self):
        assert PackedXY(x=-1, y=2).to_bytes(ByteOrder.BIG) == b"\xff\xff\x00\x02"

    def test_pack_out_of_range(self):
        with pytest.raises(FieldRangeError):
            PackedXY(x=40000, y=0).pack()

    def test_editable_forms_agree(self):
        assert PackedXY.from_editable([-1, 2]) == PackedXY(x=-1, y=2)
        assert PackedXY.from_editable(0xFFFF0002) == PackedXY(x=-1, y=2)
        # Legacy files may hold the word's signed reading
        assert PackedXY.from_editable(-65534) == PackedXY(x=-1, y=2)
        assert PackedXY(x=-1, y=2).to_editable() == [-1, 2]

    @pytest.mark.parametrize("value", [[1], [1, 2, 3], [1, 70000], ["1", 2], "12", True, 2 ** 32, None])
    def test_invalid_editable(self, value):
        with pytest.raises(EditableFormError):
            PackedXY.from_editable(value)


class TestHighByteFlag:

    def test_flag_in_most_significant_byte(self):
        assert HighByteFlag(0x01000000).enabled
        assert not HighByteFlag(0x00000001).enabled
        assert HighByteFlag.from_flag(True).raw == 0x01000000

    def test_setter_keeps_reserved_bits(self):
        flag = HighByteFlag(0x00000005)
        flag.enabled = True
        assert flag.raw == 0x01000005

    def test_editable_forms(self):
        assert HighByteFlag.from_editable(True) == HighByteFlag(0x01000000)
        assert HighByteFlag.from_editable(False) == HighByteFlag(0)
        assert HighByteFlag.from_editable(0x01000000) == HighByteFlag(0x01000000)

        assert HighByteFlag(0x01000000).to_editable() is True
        assert HighByteFlag(0).to_editable() is False

    def test_reserved_bits_stay_raw(self):
        assert HighByteFlag(0x01000005).to_editable() == 0x01000005
        assert HighByteFlag(0x02000000).to_editable() == 0x02000000

    def test_invalid_editable(self):
        with pytest.raises(EditableFormError):
            HighByteFlag.from_editable("yes")


class TestHighHalfSelect:

    def test_variation_in_upper_half(self):
        assert HighHalfSelect(0x00020000).variation == 2
        assert HighHalfSelect.from_variation(3).raw == 0x00030000

    def test_setter_range(self):
        select = HighHalfSelect()
        with pytest.raises(FieldRangeError):
            select.variation = 0x10000

    def test_editable_by_magnitude(self):
        # 16-bit values are variation numbers
        assert HighHalfSelect.from_editable(2).raw == 0x00020000
        # Anything wider is a legacy raw word
        assert HighHalfSelect.from_editable(0x00030000).raw == 0x00030000
        assert HighHalfSelect.from_editable(0x00030000).variation == 3

    def test_to_editable(self):
        assert HighHalfSelect(0x00020000).to_editable() == 2
        assert HighHalfSelect(0x00020001).to_editable() == 0x00020001

    def test_low_half_only_warns(self):
        assert HighHalfSelect(0x00000005).to_editable() == 5
        assert get_counts() == (0, 1)

    @pytest.mark.parametrize("value", ["2", 2.0, False, None])
    def test_invalid_editable(self, value):
        with pytest.raises(EditableFormError):
            HighHalfSelect.from_editable(value)
