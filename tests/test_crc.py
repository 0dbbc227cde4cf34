from promptqr.crc import CRC_FIELD_PREFIX, append_crc, crc16_ccitt, crc16_value


def test_crc16_ccitt_false_check_value():
    assert crc16_value(b"123456789") == 0x29B1
    assert crc16_ccitt("123456789") == "29B1"


def test_crc16_of_empty_input_is_initial_register():
    assert crc16_ccitt("") == "FFFF"


def test_crc_is_four_uppercase_hex_digits():
    crc = crc16_ccitt("000201")
    assert len(crc) == 4
    assert crc == crc.upper()
    int(crc, 16)


def test_append_crc_covers_its_own_header():
    body = "00020101021129370016A000000677010111011300668123456785802TH5303764"
    payload, crc = append_crc(body)
    assert payload == f"{body}{CRC_FIELD_PREFIX}{crc}"
    assert crc == "5D82"
    assert crc == crc16_ccitt(payload[:-4])
