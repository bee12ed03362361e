from contact_curator.cli.app import app

app()
