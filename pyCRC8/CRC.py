import sys
from functools import lru_cache


BYTE_MASK          = 0xFF
TABLE_LEN          = 256
DEFAULT_POLYNOMIAL = 0x91


def _divide_normal(remainder, poly):
    for _ in range(8):
        if remainder & 0x80:
            remainder = ((remainder << 1) & BYTE_MASK) ^ poly
        else:
            remainder = (remainder << 1) & BYTE_MASK
    return remainder


def _divide_reflected(remainder, poly):
    for _ in range(8):
        if remainder & 0x01:
            remainder = (remainder >> 1) ^ poly
        else:
            remainder >>= 1
    return remainder


@lru_cache(maxsize=TABLE_LEN)
def build_table_normal(polynomial: int) -> tuple:
    """Build the 256 entry MSB-first lookup table for the given polynomial.
    The result is cached per polynomial and must be treated as read-only.
    """
    poly = polynomial & BYTE_MASK
    return tuple(_divide_normal(i, poly) for i in range(TABLE_LEN))


@lru_cache(maxsize=TABLE_LEN)
def build_table_reflected(polynomial: int) -> tuple:
    """Build the 256 entry LSB-first lookup table for the given polynomial.
    The result is cached per polynomial and must be treated as read-only.
    """
    poly = polynomial & BYTE_MASK
    return tuple(_divide_reflected(i, poly) for i in range(TABLE_LEN))


def crc_bitwise_normal(message, polynomial: int) -> int:
    '''
    Description:
    ------------
    Reference MSB-first CRC-8, one bit at a time. Initial value and final
    XOR are both zero.

    :param message:    sequence of ints or bytes - message to checksum
    :param polynomial: int - generator polynomial without the implicit top bit

    :return: int - 8-bit remainder
    '''

    poly = polynomial & BYTE_MASK
    remainder = 0

    for byte in message:
        remainder = _divide_normal(remainder ^ (byte & BYTE_MASK), poly)

    return remainder


def crc_bitwise_reflected(message, polynomial: int) -> int:
    '''
    Description:
    ------------
    Reference LSB-first CRC-8, one bit at a time. Bytes are consumed from
    the last one to the first one.

    :param message:    sequence of ints or bytes - message to checksum
    :param polynomial: int - generator polynomial in reflected form

    :return: int - 8-bit remainder
    '''

    poly = polynomial & BYTE_MASK
    remainder = 0

    for byte in reversed(message):
        remainder = _divide_reflected(remainder ^ (byte & BYTE_MASK), poly)

    return remainder


def crc_table_normal(message, table) -> int:
    '''
    Description:
    ------------
    Table-driven MSB-first CRC-8, one lookup per byte. Gives the same
    result as crc_bitwise_normal() when table comes from
    build_table_normal() for the same polynomial.

    :param message: sequence of ints or bytes - message to checksum
    :param table:   sequence of 256 ints - see build_table_normal()

    :return: int - 8-bit remainder
    '''

    crc = 0

    for byte in message:
        crc = table[crc ^ (byte & BYTE_MASK)]

    return crc


def crc_table_reflected(message, table) -> int:
    '''
    Description:
    ------------
    Table-driven LSB-first CRC-8, one lookup per byte, last byte first.
    Gives the same result as crc_bitwise_reflected() when table comes from
    build_table_reflected() for the same polynomial.

    :param message: sequence of ints or bytes - message to checksum
    :param table:   sequence of 256 ints - see build_table_reflected()

    :return: int - 8-bit remainder
    '''

    crc = 0

    for byte in reversed(message):
        crc = table[crc ^ (byte & BYTE_MASK)]

    return crc


def _as_byte(el):
    try:
        return int(el) & BYTE_MASK
    except ValueError:
        return ord(el) & BYTE_MASK


class CRC:
    def __init__(self, polynomial=DEFAULT_POLYNOMIAL, reflected=False):
        self.poly      = polynomial & BYTE_MASK
        self.reflected = reflected
        self.crc_len   = 8
        self.table_len = TABLE_LEN

        if reflected:
            self.cs_table = build_table_reflected(self.poly)
        else:
            self.cs_table = build_table_normal(self.poly)

    def _message(self, arr, dist):
        if isinstance(arr, (bytes, bytearray)):
            return arr if dist is None else arr[:dist]

        try:
            if dist is None:
                dist = len(arr)
            return [_as_byte(arr[i]) for i in range(dist)]
        except TypeError:
            return [_as_byte(arr)]

    def print_table(self):
        for i in range(self.table_len):
            sys.stdout.write(hex(self.cs_table[i]).upper().replace('X', 'x'))

            if (i + 1) % 16:
                sys.stdout.write(' ')
            else:
                sys.stdout.write('\n')

    def calculate(self, arr, dist=None):
        """Table-driven CRC of the first dist elements of arr (all of them
        when dist is None). Elements may be ints or single characters, and a
        lone int is treated as a one byte message.
        """
        message = self._message(arr, dist)

        if self.reflected:
            return crc_table_reflected(message, self.cs_table)
        return crc_table_normal(message, self.cs_table)

    def calculate_bitwise(self, arr, dist=None):
        message = self._message(arr, dist)

        if self.reflected:
            return crc_bitwise_reflected(message, self.poly)
        return crc_bitwise_normal(message, self.poly)

    def verify(self, arr, checksum):
        return self.calculate(arr) == (checksum & BYTE_MASK)


if __name__ == '__main__':
    crc_instance = CRC()
    crc_instance.print_table()
    print(' ')
    print(hex(crc_instance.calculate('1')).upper().replace('X', 'x'))
