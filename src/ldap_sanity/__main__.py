from ldap_sanity.main import cli

cli()
