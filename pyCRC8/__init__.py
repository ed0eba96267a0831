from .CRC import (
    CRC,
    DEFAULT_POLYNOMIAL,
    build_table_normal,
    build_table_reflected,
    crc_bitwise_normal,
    crc_bitwise_reflected,
    crc_table_normal,
    crc_table_reflected,
)
