"""Helpers to build the small C programs used to probe the compiler."""

import re

# ------------------------------------------------------------------------------

_invalid_chars = re.compile(r'[^A-Za-z0-9_]')

def macro_name(*parts):
    """Convert a header, function, type or member name into a token that can
    be used as a macro name.

    >>> macro_name('sys/types.h')
    'SYS_TYPES_H'
    >>> macro_name('struct sockaddr', 'sa_family')
    'STRUCT_SOCKADDR_SA_FAMILY'
    """
    return _invalid_chars.sub('_', '_'.join(parts).upper())

def have_macro(*parts):
    return 'HAVE_' + macro_name(*parts)

# ------------------------------------------------------------------------------

def format_includes(headers):
    """Return the I{#include} lines for I{headers}, which may be I{None}, a
    single header name, or a list of header names."""

    if headers is None:
        headers = []
    elif isinstance(headers, str):
        headers = [headers]
    elif not isinstance(headers, (list, tuple)):
        raise TypeError('headers must be a string or a list of strings')

    includes = []
    for i, header in enumerate(headers):
        if not isinstance(header, str):
            raise TypeError('headers[%d] must be a string' % i)
        includes.append('#include <%s>' % header)

    return '\n'.join(includes)

def format_source(features, headers, fragment=None):
    """Return a complete C translation unit that defines I{features}, includes
    I{headers} and evaluates I{fragment} inside of I{main}."""

    if fragment is not None and not isinstance(fragment, str):
        raise TypeError('fragment must be a string or None')

    return '\n'.join([
        '\n'.join(features),
        '',
        format_includes(headers),
        '',
        'int main() {',
        '    %s;' % (fragment or ''),
        '    return 0;',
        '}',
    ])

# ------------------------------------------------------------------------------

def _require_string(value, name):
    if not isinstance(value, str):
        raise TypeError('%s must be a string' % name)

def function_fragment(func):
    _require_string(func, 'func')
    return 'void (*function_pointer)(void) = (void (*)(void))%s' % func

def type_fragment(type_):
    _require_string(type_, 'type')
    return '%s x' % type_

def decl_fragment(name):
    _require_string(name, 'decl')
    return '(void)%s' % name

def member_fragment(type_, member):
    _require_string(type_, 'type')
    _require_string(member, 'member')
    return '%s x; (void)x.%s' % (type_, member)
