from minipcmon.run import cli

cli()
