# Copyright (c) 2026 NASK. All rights reserved.

import collections
import logging
import logging.config
import os.path
import sys
import traceback

from objmap.const import (
    ETC_DIR,
    TOPLEVEL_OBJMAP_PACKAGES,
    USER_DIR,
)


__all__ = [
    'get_logger',
    'configure_logging',
]


def get_logger(name=None):
    """
    Like logging.getLogger(...) but replacing '__main__' with a sensible name.

    For example, if the script path is '/whatever/objmap/tools/foo.py'
    get_logger('__main__') is equivalent to logging.getLogger('objmap.tools.foo').
    """
    if name == '__main__':
        # try to get the script path from __main__.__file__
        script_path = getattr(sys.modules['__main__'], '__file__', None)
        if not script_path:
            # or, if __main__ does not have a non-blank __file__ attribute,
            # extract the script path from sys.argv...
            script_path = sys.argv[0]
        # strip off the filename extension...
        remaining = os.path.splitext(script_path)[0]
        # ..and pop path name segments up to
        # (and including) the objmap toplevel package name
        aggregated_segments = collections.deque()
        while True:
            remaining, segment = os.path.split(remaining)
            segment = segment.replace('.', 'D')  # just in case of '.' or '..'
            aggregated_segments.appendleft(segment)
            if segment in TOPLEVEL_OBJMAP_PACKAGES or remaining in ('', '/'):
                break
        name = '.'.join(aggregated_segments)
    return logging.getLogger(name)


_LOGGER = get_logger(__name__)

_loaded_configuration_paths = set()


def configure_logging(suffix=None):
    """
    Configure logging using the `logging.conf` file (or, if `suffix` is
    specified, the `logging-<suffix>.conf` file) from the system-wide
    and/or the user-specific configuration directory (see:
    `objmap.const.ETC_DIR` and `objmap.const.USER_DIR`).

    Each file is loaded at most once (subsequent attempts are ignored,
    with a warning).

    Raises:
        `RuntimeError` -- if the configuration is broken or if no
        configuration file could be loaded.
    """
    file_name = ('logging.conf' if suffix is None
                 else 'logging-{0}.conf'.format(suffix))
    file_paths = [os.path.join(config_dir, file_name)
                  for config_dir in (ETC_DIR, USER_DIR)]
    for path in file_paths:
        if path in _loaded_configuration_paths:
            _LOGGER.warning('ignored attempt to load logging configuration '
                            'file %a that has already been used', path)
            continue
        try:
            _try_reading(path)
        except OSError:
            pass
        else:
            try:
                logging.config.fileConfig(path, disable_existing_loggers=False)
            except Exception:
                raise RuntimeError('error while configuring logging, '
                                   'using settings from configuration file {0!a}:\n{1}'
                                   .format(path, traceback.format_exc()))
            else:
                _LOGGER.info('logging configuration loaded from %a', path)
                _loaded_configuration_paths.add(path)
    if not _loaded_configuration_paths:
        raise RuntimeError('logging configuration not loaded: '
                           'could not open any of the files: {0}'
                           .format(', '.join(map(ascii, file_paths))))


def _try_reading(path):
    open(path).close()
