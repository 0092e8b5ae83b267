from chabash.cli.cli import run

run()
