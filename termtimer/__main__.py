from termtimer.cli import app

app()
