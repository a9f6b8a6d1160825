from rich.pretty import pprint

from argot import *

DEVICE_NAME = "Name of a device. Argument can be ignored when only one device is connected."


def build():
    syntax = Syntax("Loro device programmer", "2.1.32.7")

    syntax.add(Command("list", "list", brief="Lists all Loro devices.",
                       remarks="Command lists system names of all connected Loro devices."))

    syntax.add(Command("reset", "reset", brief="Resets device.", remarks="Command resets Loro device."))
    syntax.add(Parameter("device-name", "-d", remarks=DEVICE_NAME, cardinality=1))

    syntax.add(Command("program", "program", brief="Programs device with specified file.",
                       remarks="Command programs Loro device with specified program file."))
    syntax.add(Parameter("device-name", "-d", remarks=DEVICE_NAME, cardinality=1))
    syntax.add(Parameter("program-file-path", "-p", remarks="Program file path.", required=True, cardinality=1))

    syntax.add(Command("backup", "backup", brief="Downloads device program into local file for backup.",
                       remarks="Command reads Loro device program and stores it in local file."))
    syntax.add(Parameter("device-name", "-d", remarks=DEVICE_NAME, cardinality=1))
    syntax.add(Parameter("program-file-path", "-p", remarks="Program file path.", required=True, cardinality=1))

    syntax.add(Command("erase", "erase", brief="Erases device.", remarks="Command erases program from Loro device."))
    syntax.add(Parameter("device-name", "-d", remarks=DEVICE_NAME, cardinality=1))

    syntax.add(Command("secure", "secure", brief="Secures device.",
                       remarks="Command secures Loro device. Once the device is secured its "
                               "program cannot be read or updated even by external programmer. "
                               "To exit secured mode the device need to be reset to factory "
                               "settings using special electrical technique."))
    syntax.add(Parameter("device-name", "-d", remarks=DEVICE_NAME, cardinality=1))
    syntax.add(Parameter("force", "-f", "--force", remarks="Do not prompt user.", required=False))

    return syntax


if __name__ == '__main__':
    pprint(dict(invoke(build(), diagnose=True)))
