import sys

# ------------------------------------------------------------------------------

colorcodes = {
    'black'  : 30,
    'red'    : 31,
    'green'  : 32,
    'yellow' : 33,
    'blue'   : 34,
    'magenta': 35,
    'cyan'   : 36,
    'white'  : 37,
}

def color_str(s, color):
    if color is not None and sys.platform != 'win32':
        try:
            color = colorcodes[color]
        except KeyError:
            # we couldn't find the color so just ignore
            pass
        else:
            return '\x1b[01;%.2dm%s\x1b[0m' % (color, s)

    return s

# ------------------------------------------------------------------------------

class Log:
    """L{Log} writes progress messages to I{file}, or to the current
    I{sys.stdout} when no file was given. Every message carries a verbosity
    level and is dropped unless it is at or below I{verbose}."""

    def __init__(self, file=None, *, verbose=0, nocolor=False):
        self.file = file
        self.verbose = verbose
        self.nocolor = nocolor

    @property
    def stream(self):
        return sys.stdout if self.file is None else self.file

    def use_color(self):
        if self.nocolor:
            return False

        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def write(self, msg, color=None, verbose=0):
        if verbose > self.verbose:
            return

        # make sure message is a string
        msg = str(msg)
        if self.use_color():
            msg = color_str(msg, color)
        self.stream.write(msg)
        self.flush()

    def flush(self):
        try:
            self.stream.flush()
        except (AttributeError, ValueError):
            pass

    def log(self, msg, color=None, verbose=0):
        self.write(msg, color=color, verbose=verbose)
        self.write('\n', verbose=verbose)

    def check(self, msg, result=None, color=None, verbose=0):
        self.write(str(msg) + ' ... ', verbose=verbose)

        if result is not None:
            self.log(result, color=color, verbose=verbose)

    def passed(self, msg='found', color='green', verbose=0):
        self.log(msg, color=color, verbose=verbose)

    def failed(self, msg='not found', color='yellow', verbose=0):
        self.log(msg, color=color, verbose=verbose)

    def indented(self, text, indent='    ', color=None, verbose=0):
        for line in str(text).rstrip().splitlines():
            self.log(indent + line, color=color, verbose=verbose)
