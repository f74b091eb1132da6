import contextlib
import os
import shutil
import tempfile as _tempfile

# ------------------------------------------------------------------------------

@contextlib.contextmanager
def tempdir(dir=None, *args, **kwargs):
    '''
    Create a temporary directory and yield it's path. When we regain context,
    remove the directory.
    '''

    path = _tempfile.mkdtemp(dir=dir, *args, **kwargs)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)

# ------------------------------------------------------------------------------

@contextlib.contextmanager
def tempfile(src='', suffix='', name='temp', **kwargs):
    '''
    Create a temporary file in a unique directory and yield the name of the
    file. When we regain context, remove the directory along with anything
    else that was written into it.

    @param src:    write this source in the tempfile before yielding
    @param suffix: the default suffix of the temp file
    @param name:   the name of the temp file
    '''

    with tempdir(prefix='configh-', **kwargs) as dirname:
        name = os.path.join(dirname, name + suffix)
        with open(name, 'w') as f:
            print(src, file=f)

        yield name
