import logging
import os
from enum import Enum

import serial
import serial.tools.list_ports
from .CRC import CRC, DEFAULT_POLYNOMIAL


class InvalidSerialPort(Exception):
    pass


class Status(Enum):
    CONTINUE  = 2
    NEW_DATA  = 1
    NO_DATA   = 0
    CRC_ERROR = -1


def serial_ports():
    return [p.device for p in serial.tools.list_ports.comports(include_links=True)]


class CRCLink:
    def __init__(self, port, baud=115200, polynomial=DEFAULT_POLYNOMIAL, reflected=False, restrict_ports=True, debug=True, timeout=0.05):
        '''
        Description:
        ------------
        Initialize a CRC-8 checked link on the specified serial port. Every
        message written is followed by its CRC byte, and every message read
        is expected to be followed by one.

        :param port:           str  - port the device is connected to
        :param baud:           int  - baud (bits per sec) the device is configured for
        :param polynomial:     int  - CRC-8 generator polynomial
        :param reflected:      bool - use the LSB-first (reflected) engine
        :param restrict_ports: bool - only allow port selection from auto
                                      detected list
        :param timeout:       float - read timeout (in s) handed to pySerial

        :return: void
        '''

        self.bytes_read = 0
        self.rx_buff    = bytearray()
        self.payload_   = b''

        self.debug  = debug
        self.status = Status.NO_DATA

        if restrict_ports:
            self.port_name = None
            for p in serial_ports():
                if p == port or os.path.split(p)[-1] == port:
                    self.port_name = p
                    break

            if self.port_name is None:
                raise InvalidSerialPort('Invalid serial port specified. Valid options are {ports}, but {port} was provided'.format(
                    **{'ports': serial_ports(), 'port': port}))
        else:
            self.port_name = port

        self.crc = CRC(polynomial, reflected)
        self.connection = serial.Serial()
        self.connection.port = self.port_name
        self.connection.baudrate = baud
        self.connection.timeout = timeout

    def open(self):
        '''
        Description:
        ------------
        Open serial port and connect to device if possible

        :return: bool - True if successful, else False
        '''

        if not self.connection.is_open:
            try:
                self.connection.open()
                return True
            except serial.SerialException as e:
                logging.exception(e)
                return False
        return True

    def close(self):
        if self.connection.is_open:
            self.connection.close()

    def append_crc(self, payload):
        '''
        Description:
        ------------
        Return the payload followed by its CRC byte

        :param payload: bytes or list of int - non-empty message

        :return: bytearray - payload + CRC
        '''

        payload = bytes(payload)

        if not payload:
            raise ValueError('Payload must not be empty')

        stack = bytearray(payload)
        stack.append(self.crc.calculate(payload))

        return stack

    def send(self, payload):
        '''
        Description:
        ------------
        Write a payload followed by its CRC byte

        :param payload: bytes or list of int - data to send

        :return: bool - whether or not the data was written
        '''

        stack = self.append_crc(payload)

        if not self.open():
            return False

        try:
            self.connection.write(stack)
        except serial.SerialException as e:
            logging.exception(e)
            return False

        return True

    def available(self, message_len):
        '''
        Description:
        ------------
        Collect incoming bytes until message_len payload bytes plus their
        CRC byte are buffered, then check the CRC. Bytes already buffered
        are kept across polls that find nothing to read.

        :param message_len: int - payload bytes per message

        :return self.bytes_read: int - number of payload bytes available
                                      through payload(), 0 if none
        '''

        if message_len <= 0:
            raise ValueError('Message length must be positive, got {}'.format(message_len))

        self.bytes_read = 0

        if not self.open():
            self.status = Status.CONTINUE
            return self.bytes_read

        waiting = self.connection.in_waiting
        if waiting:
            self.rx_buff.extend(self.connection.read(waiting))

        if len(self.rx_buff) <= message_len:
            self.status = Status.CONTINUE if self.rx_buff else Status.NO_DATA
            return self.bytes_read

        payload = bytes(self.rx_buff[:message_len])
        received = self.rx_buff[message_len]
        del self.rx_buff[:message_len + 1]

        if not self.crc.verify(payload, received):
            if self.debug:
                logging.error('CRC_ERROR: expected 0x{:02X}, received 0x{:02X}'.format(
                    self.crc.calculate(payload), received))
            self.status = Status.CRC_ERROR
            return self.bytes_read

        self.payload_ = payload
        self.bytes_read = message_len
        self.status = Status.NEW_DATA
        return self.bytes_read

    def payload(self):
        return self.payload_
