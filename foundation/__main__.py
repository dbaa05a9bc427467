from foundation.server import run

run()
