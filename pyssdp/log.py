import datetime

from pyssdp.static import LOG_FILE

class Log:
    def __init__(self, debug: bool=False, path: str=LOG_FILE):
        """
        debug - whether to display debug information
        path - file that debug information is appended to
        """

        self.debug = debug
        self.path = path

    def __call__(self, *args):
        """
        If debug level was set as True,
            prints debug information to console and writes to file
        """

        if self.debug:
            # assemble full log message
            full_message = " ".join([str(arg) for arg in args])
            # add current time
            full_message = "[%s] %s" % (str(datetime.datetime.now()), full_message)

            # write to file
            with open(self.path, "a") as f:
                f.write(full_message + "\n")
            # print to console
            print(full_message)
