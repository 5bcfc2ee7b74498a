from knowhow.cli import app

app(prog_name="knowhow")
