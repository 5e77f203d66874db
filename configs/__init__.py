"""Schema knowledge for rulesetcfg: validation, defaults and version migration."""
