from nordigen_lunchmoney_connect.bootstrap import bootstrap_di

bootstrap_di()
