from pgtables.cli import run

run()
