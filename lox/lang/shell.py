"""Handles interactive/command-line mode for the Lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def default(self, line):
        """Runs arbitrary Lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:  # 'help' is also a valid Lox identifier
            self.default(self.lastcmd)
            return
        self.stdout.write(
            "Welcome to the Lox interpreter!\n\n"
            "Each line is scanned, parsed and run on its own, but variables declared at the top \n"
            "level are kept until you leave. Try typing 'var greeting = \"hi\";' and then \n"
            "'print greeting + \" there\";'.\n"
        )

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:  # 'exit' is also a valid Lox identifier
            self.default(self.lastcmd)
            return False
        return True
