import argparse
import logging
import random
import time

from .CRC import (
    DEFAULT_POLYNOMIAL,
    build_table_normal,
    build_table_reflected,
    crc_bitwise_normal,
    crc_bitwise_reflected,
    crc_table_normal,
    crc_table_reflected,
)


DEFAULT_ITERATIONS = 1000000
DEFAULT_LENGTH     = 32


def generate_random_message(length, rng=None):
    '''
    Description:
    ------------
    Generate a message of uniformly distributed random bytes

    :param length: int           - number of bytes in the message
    :param rng:    random.Random - generator to draw from, module level
                                   generator if None

    :return: bytes - random message
    '''

    if length < 0:
        raise ValueError('Message length must not be negative, got {}'.format(length))

    if rng is None:
        rng = random

    return bytes(rng.randrange(256) for _ in range(length))


def make_engines(polynomial=DEFAULT_POLYNOMIAL):
    '''
    Description:
    ------------
    Bind the four CRC engines to a polynomial. Both lookup tables are built
    up front so that table construction never counts towards timing.

    :param polynomial: int - generator polynomial

    :return: dict - engine name -> callable taking a message
    '''

    table = build_table_normal(polynomial)
    reflect_table = build_table_reflected(polynomial)

    return {'crc_slow':          lambda msg: crc_bitwise_normal(msg, polynomial),
            'crc_table':         lambda msg: crc_table_normal(msg, table),
            'crc_reflect_slow':  lambda msg: crc_bitwise_reflected(msg, polynomial),
            'crc_reflect_table': lambda msg: crc_table_reflected(msg, reflect_table)}


def time_engine(func, iterations, length, rng=None):
    '''
    Description:
    ------------
    Run func over freshly generated messages and sum the time spent inside
    func only. Message generation is not timed.

    :param func:       callable      - CRC engine taking a message
    :param iterations: int           - number of messages to process
    :param length:     int           - bytes per message
    :param rng:        random.Random - message generator

    :return: float - total seconds spent in func
    '''

    if iterations <= 0:
        raise ValueError('Iterations must be positive, got {}'.format(iterations))

    elapsed = 0.0

    for _ in range(iterations):
        message = generate_random_message(length, rng)
        start = time.perf_counter()
        func(message)
        elapsed += time.perf_counter() - start

    return elapsed


def check_agreement(messages, polynomial=DEFAULT_POLYNOMIAL):
    '''
    Description:
    ------------
    Compare each bitwise engine against its table-driven counterpart

    :param messages:   iterable of messages
    :param polynomial: int - generator polynomial

    :return: int - number of mismatching results
    '''

    engines = make_engines(polynomial)
    mismatches = 0

    for message in messages:
        for slow, fast in (('crc_slow', 'crc_table'),
                           ('crc_reflect_slow', 'crc_reflect_table')):
            expected = engines[slow](message)
            found = engines[fast](message)

            if expected != found:
                mismatches += 1
                logging.error('{} gave 0x{:02X} but {} gave 0x{:02X} for {}'.format(
                    slow, expected, fast, found, bytes(message).hex()))

    return mismatches


def run(iterations=DEFAULT_ITERATIONS, length=DEFAULT_LENGTH, polynomial=DEFAULT_POLYNOMIAL, seed=None):
    '''
    Description:
    ------------
    Time every engine over random messages and print one line per engine

    :return: list - (engine name, seconds) pairs in engine order
    '''

    rng = random.Random(seed)
    engines = make_engines(polynomial)
    results = []

    logging.debug('Timing {} messages of {} bytes, polynomial 0x{:02X}'.format(
        iterations, length, polynomial & 0xFF))

    for name, func in engines.items():
        elapsed = time_engine(func, iterations, length, rng)
        results.append((name, elapsed))
        print('{} time: {} seconds'.format(name, elapsed))

    return results


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Benchmark the CRC-8 engines')
    parser.add_argument('--iterations', type=int, default=DEFAULT_ITERATIONS,
                        help='number of messages per engine (default: %(default)s)')
    parser.add_argument('--length', type=int, default=DEFAULT_LENGTH,
                        help='bytes per message (default: %(default)s)')
    parser.add_argument('--polynomial', type=lambda s: int(s, 0), default=DEFAULT_POLYNOMIAL,
                        help='generator polynomial, e.g. 0x91 (default: 0x91)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the message generator')
    parser.add_argument('--verify', action='store_true',
                        help='check bitwise and table engines agree before timing')
    parser.add_argument('--debug', action='store_true',
                        help='enable debug logging')
    args = parser.parse_args(argv)

    if args.iterations <= 0:
        parser.error('--iterations must be positive, got {}'.format(args.iterations))
    if args.length < 0:
        parser.error('--length must not be negative, got {}'.format(args.length))

    return args


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    if args.verify:
        rng = random.Random(args.seed)
        messages = [generate_random_message(args.length, rng) for _ in range(min(args.iterations, 1000))]

        if check_agreement(messages, args.polynomial):
            return 1

        logging.info('All engines agree on {} messages'.format(len(messages)))

    run(args.iterations, args.length, args.polynomial, args.seed)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
