import os
import shlex
import subprocess
import tempfile
import time
import weakref

import configh
import configh.console
import configh.probe
import configh.temp
from configh.orderedset import OrderedSet

# ------------------------------------------------------------------------------

def _release_scratch(buf, path):
    buf.close()
    try:
        os.remove(path)
    except FileNotFoundError:
        pass

# ------------------------------------------------------------------------------

class Executor:
    """L{Executor} compiles probe programs with a C compiler.

    The compiler is taken from I{cc}, or from the I{CC} environment variable
    if I{cc} is not given. Flags in the I{CPPFLAGS} environment variable are
    passed to every compile.

    Compiler diagnostics are captured in a scratch file that lives as long as
    the executor. It is removed by L{close}, when leaving a I{with} block, or
    when the executor is garbage collected, whichever happens first.
    """

    obj_name = 'a.out'
    src_name = 'conftest'
    src_suffix = '.c'

    def __init__(self, cc=None, *, logger=None):
        if cc is None:
            cc = os.environ.get('CC')
            if not cc:
                raise configh.ConfigFailed(
                    'cc argument or CC environment variable must contain '
                    'compiler name')
        elif not isinstance(cc, str):
            raise TypeError('cc must be a string or None')

        if not shlex.split(cc):
            raise configh.ConfigFailed(
                'cc argument or CC environment variable must contain '
                'compiler name')

        self.cc = cc
        self.logger = configh.console.Log() if logger is None else logger

        self._cppflags = OrderedSet()
        self._features = OrderedSet()

        for flag in os.environ.get('CPPFLAGS', '').split():
            self.add_cppflag(flag)

        fd, self.buffile = tempfile.mkstemp(prefix='configh-', suffix='.err')
        self.buf = os.fdopen(fd, 'w+b')
        self._finalizer = weakref.finalize(self, _release_scratch,
            self.buf, self.buffile)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.cc)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Remove the scratch file. Calling this more than once is harmless."""
        self._finalizer()

    @property
    def closed(self):
        return not self._finalizer.alive

    # --------------------------------------------------------------------------

    @property
    def cppflags(self):
        return self._cppflags.values()

    @property
    def features(self):
        return self._features.values()

    def add_cppflag(self, flag):
        if not isinstance(flag, str):
            raise TypeError('flag must be a string')
        self._cppflags.add(flag)

    def remove_cppflag(self, flag):
        if not isinstance(flag, str):
            raise TypeError('flag must be a string')
        self._cppflags.remove(flag)

    def set_feature(self, name, value=None):
        """Define the macro I{name} in every probe. Redefining a feature keeps
        its original position."""
        if not isinstance(name, str):
            raise TypeError('name must be a string')

        if value is None:
            line = '#define %s' % name
        elif isinstance(value, str) or \
                (isinstance(value, int) and not isinstance(value, bool)):
            line = '#define %s %s' % (name, value)
        else:
            raise TypeError('value must be a string, an integer or None')

        self._features.set(name, line)

    def unset_feature(self, name):
        if not isinstance(name, str):
            raise TypeError('name must be a string')
        self._features.remove(name)

    # --------------------------------------------------------------------------

    def execute(self, cmd):
        """Run I{cmd} with stderr redirected into the scratch file. Raises
        L{configh.ExecutionError} if the command exits with an error."""

        if self.closed:
            raise configh.Error('%r is closed' % self)

        cmd_string = ' '.join(cmd)

        starttime = time.time()
        try:
            p = subprocess.Popen(cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=self.buf)
            returncode = p.wait()
        except OSError as e:
            self.logger.log('command failed: ' + cmd_string, color='red')
            raise configh.ConfigFailed('cannot execute %r: %s' %
                (cmd[0], e)) from e
        endtime = time.time()

        self.logger.log(' + ' + cmd_string, verbose=1)

        # The compiler wrote through the shared descriptor, so rewind before
        # reading and empty the file for the next probe.
        self.buf.seek(0)
        stderr = self.buf.read().decode('utf-8', 'replace')
        self.buf.seek(0)
        self.buf.truncate()

        self.logger.log(
            ' - exit %d, %.2f sec' % (returncode, endtime - starttime),
            verbose=2)

        if returncode:
            raise configh.ExecutionError(cmd, stderr, returncode)

        return stderr

    def compile(self, src):
        """Compile the source file I{src}. Returns I{(True, None)} if it
        compiled, otherwise I{(False, diagnostic)}. The object file is written
        next to the source."""

        obj = os.path.join(os.path.dirname(src), self.obj_name)
        cmd = shlex.split(self.cc) + self.cppflags + ['-o', obj, src]

        try:
            self.execute(cmd)
        except configh.ExecutionError as e:
            return False, e.stderr
        else:
            return True, None
        finally:
            for path in src, obj:
                try:
                    os.remove(path)
                except FileNotFoundError:
                    pass

    def try_compile(self, headers=None, fragment=None):
        code = configh.probe.format_source(self.features, headers, fragment)
        with configh.temp.tempfile(code, self.src_suffix, self.src_name) as src:
            return self.compile(src)

    # --------------------------------------------------------------------------
    # Each check returns I{(ok, diagnostic)}. A missing feature is never an
    # error; the only exception a check raises besides a I{TypeError} for bad
    # arguments is L{configh.ConfigFailed} when the compiler cannot be
    # started at all.

    def check_header(self, headers):
        return self.try_compile(headers)

    def check_func(self, headers, func):
        fragment = configh.probe.function_fragment(func)
        return self.try_compile(headers, fragment)

    def check_type(self, headers, type_):
        fragment = configh.probe.type_fragment(type_)
        return self.try_compile(headers, fragment)

    def check_decl(self, headers, name):
        fragment = configh.probe.decl_fragment(name)
        return self.try_compile(headers, fragment)

    def check_member(self, headers, type_, member):
        fragment = configh.probe.member_fragment(type_, member)
        return self.try_compile(headers, fragment)
