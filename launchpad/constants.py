"""Protocol constants and process exit codes for the control channel.

The values mirror the launcher's historic control listener so that the
client and server sides of different releases keep talking to each other.
"""

# Commands accepted by the control server
COMMAND_STOP: str = "stop"
COMMAND_STATUS: str = "status"

# Acknowledgement sent for recognised commands
RESPONSE_OK: str = "OK"
# Prefix of the reply echoing an unrecognised command
RESPONSE_ERROR_PREFIX: str = "ERR:"

LINE_TERMINATOR: str = "\r\n"
ENCODING: str = "utf-8"

DEFAULT_LISTEN_INTERFACE: str = "127.0.0.1"
# Port 0 lets the operating system pick a free port
DEFAULT_LISTEN_PORT: int = 0
LISTEN_BACKLOG: int = 5

# <home>/conf/controlport
CONFIG_DIR_NAME: str = "conf"
CONTROL_PORT_FILE_NAME: str = "controlport"

# LSB init script exit codes
EXIT_OK: int = 0
EXIT_DEAD: int = 1
EXIT_NOT_RUNNING: int = 3
EXIT_UNKNOWN: int = 4
