from a11ym.cli import app

app()
