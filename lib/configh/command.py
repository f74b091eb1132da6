import configh
import configh.header

# ------------------------------------------------------------------------------

def _check_each(cfgh, check, groups):
    """Run I{check} for every name in every header group, skipping the groups
    whose header is unavailable."""
    for header, names in (groups or {}).items():
        ok, _ = cfgh.check_header(header)
        if not ok:
            continue

        for name in names or ():
            check(header, name)

def configure(cfgh, config):
    """Apply the validated I{config} to the L{ConfigHeader} I{cfgh}."""

    if config.get('output_status'):
        cfgh.enable_status_output(True)

    features = config.get('features') or ()
    if isinstance(features, dict):
        for name, value in features.items():
            cfgh.set_feature(name, value)
    else:
        for name in features:
            cfgh.set_feature(name)

    for flag in config.get('cppflags') or ():
        cfgh.add_cppflag(flag)

    for header in config.get('headers') or ():
        cfgh.check_header(header)

    _check_each(cfgh, cfgh.check_func, config.get('funcs'))
    _check_each(cfgh, cfgh.check_type, config.get('types'))
    _check_each(cfgh, cfgh.check_decl, config.get('decls'))

    for header, members in (config.get('members') or {}).items():
        ok, _ = cfgh.check_header(header)
        if not ok:
            continue

        for type_, names in (members or {}).items():
            for member in names or ():
                cfgh.check_member(header, type_, member)

def run(config, out_file, *, stdout=None, logger=None):
    """Run every check in I{config} and write the results to I{out_file}."""

    with configh.header.ConfigHeader(config.get('cc'), logger=logger) as cfgh:
        if stdout is not None:
            cfgh.set_status_sink(stdout)

        configure(cfgh, config)

        ok, err = cfgh.flush(out_file)
        if not ok:
            raise configh.Error(err)

        return cfgh.macros
