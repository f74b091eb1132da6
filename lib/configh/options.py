import argparse

import configh

# ------------------------------------------------------------------------------

def make_parser():
    description = """
    Configh probes the C compiler for headers, functions, types, declarations
    and struct members, and writes the results into a config.h header.
    """

    parser = argparse.ArgumentParser(prog='configh', description=description)

    parser.add_argument('config',
                        help='the YAML file that lists the checks to run')
    parser.add_argument('--out', default='config.h', metavar='FILENAME',
                        help='the header to generate (default: config.h)')
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + configh.__version__)
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='print out extra debugging info')
    parser.add_argument('--no-color', dest='nocolor', action='store_true',
                        default=False, help='do not use colors')

    return parser
