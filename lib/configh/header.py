import datetime

import configh.console
import configh.probe
from configh.executor import Executor
from configh.orderedset import OrderedSet

# ------------------------------------------------------------------------------

class ConfigHeader(Executor):
    """L{ConfigHeader} runs probes and records every result as a macro line
    to be written into a generated header by L{flush}.

    A successful check records I{#define HAVE_<NAME> 1} and a failed check
    records I{/* #undef HAVE_<NAME> */}. Checks never raise for a missing
    feature; they return I{(ok, diagnostic)} just like the L{Executor}, and
    raise L{configh.ConfigFailed} only when the compiler cannot be started."""

    banner = 'this file was generated by configh module'

    def __init__(self, cc=None, **kwargs):
        super().__init__(cc, **kwargs)

        self._macros = OrderedSet()
        self._status_output = False

    @property
    def macros(self):
        return self._macros.values()

    # --------------------------------------------------------------------------

    def enable_status_output(self, enabled):
        if not isinstance(enabled, bool):
            raise TypeError('enabled must be a boolean')
        self._status_output = enabled

    def set_status_sink(self, file):
        """Send status lines to I{file}. The session gets its own L{Log} so a
        logger shared with other code keeps writing where it did."""
        self.logger = configh.console.Log(file,
            verbose=self.logger.verbose,
            nocolor=self.logger.nocolor)

    def _report(self, msg, ok, err):
        if not self._status_output:
            return

        self.logger.check(msg)
        if ok:
            self.logger.passed()
        else:
            self.logger.failed()
            if err:
                self.logger.indented(err, verbose=1)

    def _record(self, name, ok):
        if ok:
            self._macros.add('#define %s 1' % name)
        else:
            self._macros.add('/* #undef %s */' % name)

    # --------------------------------------------------------------------------

    def check_header(self, headers):
        """Check that I{headers} can be included. When several headers are
        given, the earlier ones are prerequisites and the result is recorded
        for the last one."""
        if isinstance(headers, str):
            headers = [headers]
        if not headers:
            raise TypeError('headers must not be empty')

        ok, err = super().check_header(headers)
        self._record(configh.probe.have_macro(headers[-1]), ok)
        self._report('check header: %s' % _join(headers), ok, err)
        return ok, err

    def check_func(self, headers, func):
        ok, err = super().check_func(headers, func)
        self._record(configh.probe.have_macro(func), ok)
        self._report(_in('check func: %s' % func, headers), ok, err)
        return ok, err

    def check_type(self, headers, type_):
        ok, err = super().check_type(headers, type_)
        self._record(configh.probe.have_macro(type_), ok)
        self._report(_in('check type: %s' % type_, headers), ok, err)
        return ok, err

    def check_decl(self, headers, name):
        ok, err = super().check_decl(headers, name)
        self._record(configh.probe.have_macro(name), ok)
        self._report(_in('check decl: %s' % name, headers), ok, err)
        return ok, err

    def check_member(self, headers, type_, member):
        ok, err = super().check_member(headers, type_, member)
        self._record(configh.probe.have_macro(type_, member), ok)
        self._report(_in('check member: %s.%s' % (type_, member), headers),
            ok, err)
        return ok, err

    # --------------------------------------------------------------------------

    def format(self, timestamp=None):
        """Return the contents of the generated header."""
        if timestamp is None:
            timestamp = datetime.datetime.now().replace(microsecond=0)

        lines = [
            '/**',
            ' * %s' % self.banner,
            ' * at %s' % timestamp.isoformat(),
            ' */',
            '',
        ]
        for line in self.features + self.macros:
            lines.append(line)
            lines.append('')

        return '\n'.join(lines) + '\n'

    def flush(self, pathname):
        """Write the generated header to I{pathname}. Returns I{(True, None)}
        or I{(False, message)} if the file could not be written."""
        if not isinstance(pathname, str):
            raise TypeError('pathname must be a string')

        code = self.format()
        try:
            with open(pathname, 'w') as f:
                f.write(code)
        except OSError as e:
            return False, 'failed to write %s: %s' % (pathname, e.strerror or e)

        self.logger.log(' * creating ' + pathname, color='cyan', verbose=1)
        return True, None

# ------------------------------------------------------------------------------

def _join(headers):
    if headers is None:
        return ''
    elif isinstance(headers, str):
        return headers
    return ' '.join(headers)

def _in(msg, headers):
    headers = _join(headers)
    if headers:
        msg += ' in ' + headers
    return msg
