"""Load and validate the declarative list of checks.

The configuration is a YAML document such as::

    cc: cc
    output_status: true
    features:
      _GNU_SOURCE:
      HAVE_CONFIG_H: 1
    cppflags: [-I/usr/local/include]
    headers: [stdio.h, sys/types.h]
    funcs:
      stdio.h: [printf, fprintf]
    types:
      sys/types.h: [pid_t]
    decls:
      errno.h: [errno]
    members:
      sys/socket.h:
        struct sockaddr: [sa_family]
"""

import yaml

from configh import ConfigFailed

# ------------------------------------------------------------------------------

def check_string(key, value):
    if value is not None and not isinstance(value, str):
        raise ConfigFailed('%s must be a string or null' % key)

def check_boolean(key, value):
    if value is not None and not isinstance(value, bool):
        raise ConfigFailed('%s must be a boolean or null' % key)

def check_string_list(key, value):
    if value is None:
        return

    if not isinstance(value, list):
        raise ConfigFailed('%s must be a list of strings or null' % key)

    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigFailed('%s[%d] must be a string, got %s' %
                (key, i, type(item).__name__))

def check_features(key, value):
    if value is None:
        return

    if isinstance(value, list):
        check_string_list(key, value)
    elif isinstance(value, dict):
        for name, val in value.items():
            if not isinstance(name, str):
                raise ConfigFailed('%s name %r must be a string' % (key, name))
            if val is not None and (isinstance(val, bool) or
                    not isinstance(val, (str, int))):
                raise ConfigFailed(
                    '%s.%s value must be a string, an integer or null, got %s' %
                    (key, name, type(val).__name__))
    else:
        raise ConfigFailed('%s must be a list of strings or a mapping of '
            'names to values' % key)

def check_header_map(key, value):
    if value is None:
        return

    if not isinstance(value, dict):
        raise ConfigFailed('%s must be a mapping of headers to lists of '
            'strings' % key)

    for header, names in value.items():
        if not isinstance(header, str):
            raise ConfigFailed('%s header %r must be a string' % (key, header))
        check_string_list('%s.%s' % (key, header), names)

def check_member_map(key, value):
    if value is None:
        return

    if not isinstance(value, dict):
        raise ConfigFailed('%s must be a mapping of headers to mappings of '
            'types to lists of strings' % key)

    for header, types in value.items():
        if not isinstance(header, str):
            raise ConfigFailed('%s header %r must be a string' % (key, header))
        check_header_map('%s.%s' % (key, header), types)

# ------------------------------------------------------------------------------

validators = {
    'cc': check_string,
    'output_status': check_boolean,
    'features': check_features,
    'cppflags': check_string_list,
    'headers': check_string_list,
    'funcs': check_header_map,
    'types': check_header_map,
    'decls': check_header_map,
    'members': check_member_map,
}

def validate_config(config):
    """Raise L{ConfigFailed} unless I{config} has the expected shape."""

    if not isinstance(config, dict):
        raise ConfigFailed('config must be a mapping')

    for key, value in config.items():
        try:
            validator = validators[key]
        except KeyError:
            raise ConfigFailed('unknown config key %r' % key) from None
        validator(key, value)

    return config

def load_config(path):
    """Read and validate the configuration file I{path}."""

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFailed('failed to load config file %s: %s' %
            (path, e.strerror or e)) from e
    except yaml.YAMLError as e:
        raise ConfigFailed('failed to parse config file %s: %s' %
            (path, e)) from e

    # An empty document means no checks at all.
    if config is None:
        config = {}

    return validate_config(config)
