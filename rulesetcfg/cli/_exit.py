# Process exit codes shared by every subcommand.
OK = 0
USER_ERR = 2
IO_ERR = 3
INTERNAL = 4
