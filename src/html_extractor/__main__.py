from .cli import app

app(prog_name="html-extractor")
