"""
The entry point for the CLI tool
"""

import uvloop
from aiohttp import web

from uvr import logger
from uvr.app import build_app
from uvr.version import __version__, name


def run():
    """Builds the app and serves it on uvloop."""
    logger.info(f'Starting {name} %s!', __version__)
    web.run_app(build_app(), loop=uvloop.new_event_loop())


if __name__ == '__main__':
    run()
