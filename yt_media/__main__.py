from yt_media.cli import cli

cli()
