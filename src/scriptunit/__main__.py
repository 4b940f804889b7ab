from scriptunit.cli import app

app(prog_name="scriptunit")
