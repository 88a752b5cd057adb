# exit codes used by the command line front end
EXIT_SUCCESS = 0  # everything done, no problems
EXIT_WARNING = 1  # reached normal end of operation, but at least one identity was not found
EXIT_ERROR = 2  # terminated abruptly, did not reach end of operation

# environment variables read by ugcache
ENV_LOGGING_CONF = "UGCACHE_LOGGING_CONF"
ENV_EXIT_CODES = "UGCACHE_EXIT_CODES"
