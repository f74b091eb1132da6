import io
import os
import shutil
import subprocess
import sys
import tempfile
import unittest
from unittest import mock

import configh
import configh.command
import configh.console
import configh.main

# -----------------------------------------------------------------------------

# A fake compiler that fails whenever the probe mentions "nonexistent".
FAKE_CC = ("/bin/sh -c 'for a; do src=$a; done; "
    "if grep -q nonexistent \"$src\"; then echo \"$src: missing\" >&2; "
    "exit 1; fi' cc")

# -----------------------------------------------------------------------------

@unittest.skipIf(sys.platform == 'win32', 'needs /bin/sh')
class TestRun(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.out = os.path.join(self.tmpdir, 'config.h')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def run_config(self, config, **kwargs):
        config = dict({'cc': FAKE_CC}, **config)
        macros = configh.command.run(config, self.out, **kwargs)
        with open(self.out) as f:
            return macros, f.read()

    def testEmpty(self):
        macros, content = self.run_config({})
        self.assertEqual(macros, [])
        self.assertIn('/**', content)
        self.assertIn('generated by configh module', content)

    def testFeatures(self):
        macros, content = self.run_config({
            'features': {
                'ENABLE_FEATURE_X': None,
                'HAVE_CONFIG_H': 1,
                'quoted_value': '"foo"',
            },
        })
        self.assertIn('\n#define ENABLE_FEATURE_X\n', content)
        self.assertIn('\n#define HAVE_CONFIG_H 1\n', content)
        self.assertIn('\n#define quoted_value "foo"\n', content)

        macros, content = self.run_config({'features': ['A', 'B']})
        self.assertIn('\n#define A\n\n#define B\n', content)

    def testChecks(self):
        macros, content = self.run_config({
            'cppflags': ['-DTEST_MACRO'],
            'headers': ['stdio.h', 'nonexistent_header.h'],
            'funcs': {'stdio.h': ['printf', 'fprintf']},
            'types': {'sys/types.h': ['pid_t']},
            'decls': {'errno.h': ['errno']},
            'members': {'sys/socket.h': {'struct sockaddr': ['sa_family']}},
        })

        self.assertEqual(macros, [
            '#define HAVE_STDIO_H 1',
            '/* #undef HAVE_NONEXISTENT_HEADER_H */',
            '#define HAVE_PRINTF 1',
            '#define HAVE_FPRINTF 1',
            '#define HAVE_SYS_TYPES_H 1',
            '#define HAVE_PID_T 1',
            '#define HAVE_ERRNO_H 1',
            '#define HAVE_ERRNO 1',
            '#define HAVE_SYS_SOCKET_H 1',
            '#define HAVE_STRUCT_SOCKADDR_SA_FAMILY 1',
        ])
        for macro in macros:
            self.assertIn('\n%s\n' % macro, content)

    def testSkipsUnavailableHeaders(self):
        macros, content = self.run_config({
            'funcs': {'nonexistent.h': ['some_func']},
            'types': {'nonexistent.h': ['some_type']},
            'decls': {'nonexistent.h': ['some_decl']},
            'members': {'nonexistent.h': {'struct s': ['some_member']}},
        })

        self.assertEqual(macros, ['/* #undef HAVE_NONEXISTENT_H */'])
        self.assertNotIn('SOME_', content)

    def testOutputStatus(self):
        stdout = io.StringIO()
        self.run_config({
            'output_status': True,
            'headers': ['stdio.h', 'nonexistent.h'],
        }, stdout=stdout)

        self.assertEqual(stdout.getvalue(),
            'check header: stdio.h ... found\n'
            'check header: nonexistent.h ... not found\n')

    def testSilentByDefault(self):
        stdout = io.StringIO()
        self.run_config({'headers': ['stdio.h']}, stdout=stdout)
        self.assertEqual(stdout.getvalue(), '')

    def testStatusSinkLeavesSharedLogger(self):
        shared_out = io.StringIO()
        shared = configh.console.Log(shared_out)
        stdout = io.StringIO()
        self.run_config({
            'output_status': True,
            'headers': ['stdio.h'],
        }, stdout=stdout, logger=shared)

        self.assertIs(shared.file, shared_out)
        self.assertEqual(shared_out.getvalue(), '')
        self.assertEqual(stdout.getvalue(), 'check header: stdio.h ... found\n')

    def testFlushFailure(self):
        self.out = os.path.join(self.tmpdir, 'no', 'such', 'config.h')
        with self.assertRaises(configh.Error) as cm:
            configh.command.run({'cc': FAKE_CC}, self.out)
        self.assertIn('No such file or directory', str(cm.exception))

# -----------------------------------------------------------------------------

@unittest.skipIf(sys.platform == 'win32', 'needs /bin/sh')
class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.stdout = io.StringIO()
        self.patch = mock.patch.object(configh.logger, 'file', self.stdout)
        self.patch.start()

    def tearDown(self):
        self.patch.stop()
        shutil.rmtree(self.tmpdir)

    def write(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w') as f:
            f.write(content)
        return path

    def testMain(self):
        config = self.write('config.yaml',
            'cc: "%s"\n'
            'output_status: true\n'
            'headers: [stdio.h]\n' % FAKE_CC.replace('"', '\\"'))
        out = os.path.join(self.tmpdir, 'out.h')

        self.assertEqual(configh.main.main(
            ['configh', config, '--out', out, '--no-color']), 0)
        self.assertIn('check header: stdio.h ... found', self.stdout.getvalue())

        with open(out) as f:
            self.assertIn('\n#define HAVE_STDIO_H 1\n', f.read())

    def testMissingConfig(self):
        config = os.path.join(self.tmpdir, 'nonexistent.yaml')
        self.assertEqual(configh.main.main(['configh', config]), 1)
        self.assertIn('failed to load config file', self.stdout.getvalue())

    def testInvalidConfig(self):
        config = self.write('config.yaml', 'cc: 123\n')
        self.assertEqual(configh.main.main(['configh', config]), 1)
        self.assertIn('cc must be a string or null', self.stdout.getvalue())

    def testModuleLaunch(self):
        lib = os.path.join(os.path.dirname(os.path.dirname(
            os.path.abspath(__file__))), 'lib')
        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(
            p for p in (lib, env.get('PYTHONPATH')) if p)

        p = subprocess.run(
            [sys.executable, '-m', 'configh.main', '--version'],
            stdout=subprocess.PIPE, env=env, universal_newlines=True)
        self.assertEqual(p.returncode, 0)
        self.assertEqual(p.stdout.strip(), 'configh ' + configh.__version__)

    def testNoConfig(self):
        with mock.patch('sys.stderr', io.StringIO()) as stderr:
            with self.assertRaises(SystemExit) as cm:
                configh.main.main(['configh'])
        self.assertEqual(cm.exception.code, 2)
        self.assertIn('usage: configh', stderr.getvalue())

# -----------------------------------------------------------------------------

def suite():
    suite = unittest.TestSuite()
    suite.addTest(unittest.TestLoader().loadTestsFromTestCase(TestRun))
    suite.addTest(unittest.TestLoader().loadTestsFromTestCase(TestMain))
    return suite

if __name__ == "__main__":
    unittest.main()
