import sys

import configh
import configh.command
import configh.config
import configh.options

# ------------------------------------------------------------------------------

def parse_args(argv):
    parser = configh.options.make_parser()
    return parser.parse_args(argv[1:])

# ------------------------------------------------------------------------------

def main(argv=None):
    args = parse_args(sys.argv if argv is None else argv)

    # load the logger options into the logger
    configh.logger.verbose = args.verbose
    configh.logger.nocolor = args.nocolor

    try:
        config = configh.config.load_config(args.config)
        configh.command.run(config, args.out, logger=configh.logger)
    except configh.Error as e:
        configh.logger.log(e, color='red')
        return 1

    return 0

# ------------------------------------------------------------------------------

if __name__ == '__main__':
    sys.exit(main())
