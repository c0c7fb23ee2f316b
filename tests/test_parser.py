import unittest

from minishell.ast_tree import Command
from minishell.errors import MissingCommandError, ShellSyntaxError
from minishell.parser import MAX_ARGS, MAX_PIPE, ShellParser, parse


class TestParserAccepts(unittest.TestCase):
    def test_simple_command(self):
        self.assertEqual(parse("ls -l /tmp"), [Command(["ls", "-l", "/tmp"])])

    def test_arguments_match_whitespace_split(self):
        line = "printf   %s\t-x  y  z"
        commands = parse(line)
        self.assertEqual(len(commands), 1)
        self.assertEqual(commands[0].arguments, line.split())

    def test_same_line_twice_gives_equal_result(self):
        parser = ShellParser()
        line = "cat < in.txt | sort -r | uniq > out.txt &"
        self.assertEqual(parser.parse(line), parser.parse(line))

    def test_three_stage_pipeline(self):
        commands = parse("a | b | c")
        self.assertEqual(commands, [Command(["a"]), Command(["b"]), Command(["c"])])
        for cmd in commands:
            self.assertIsNone(cmd.input_source)
            self.assertIsNone(cmd.output_sink)
            self.assertFalse(cmd.is_background)

    def test_redirections_on_single_stage(self):
        (cmd,) = parse("sort < in.txt > out.txt")
        self.assertEqual(cmd.arguments, ["sort"])
        self.assertEqual(cmd.input_source, "in.txt")
        self.assertEqual(cmd.output_sink, "out.txt")

    def test_redirection_before_command_name(self):
        (cmd,) = parse("< in.txt cat")
        self.assertEqual(cmd, Command(["cat"], input_source="in.txt"))

    def test_output_allowed_on_last_stage(self):
        commands = parse("a | b > out.txt")
        self.assertEqual(commands[1].output_sink, "out.txt")

    def test_input_allowed_on_first_stage(self):
        commands = parse("a < in.txt | b")
        self.assertEqual(commands[0].input_source, "in.txt")

    def test_background_on_sole_stage(self):
        (cmd,) = parse("sleep 10 &")
        self.assertEqual(cmd.arguments, ["sleep", "10"])
        self.assertTrue(cmd.is_background)

    def test_background_only_marks_last_stage(self):
        commands = parse("a | b &")
        self.assertFalse(commands[0].is_background)
        self.assertTrue(commands[1].is_background)

    def test_background_with_trailing_whitespace(self):
        (cmd,) = parse("sleep 1 &   \t")
        self.assertTrue(cmd.is_background)

    def test_max_stages(self):
        commands = parse(" | ".join(["true"] * MAX_PIPE))
        self.assertEqual(len(commands), MAX_PIPE)

    def test_max_arguments(self):
        (cmd,) = parse(" ".join(["x"] * (MAX_ARGS - 1)))
        self.assertEqual(len(cmd.arguments), MAX_ARGS - 1)


class TestParserRejects(unittest.TestCase):
    def assertSyntaxError(self, line, message, error=ShellSyntaxError):
        with self.assertRaises(error) as ctx:
            parse(line)
        self.assertEqual(str(ctx.exception), message)
        return ctx.exception

    def test_missing_command_family(self):
        for line in ("", "   ", "|", "a |", "| a", "a || b"):
            with self.subTest(line=line):
                with self.assertRaises(MissingCommandError):
                    parse(line)

    def test_empty_line(self):
        self.assertSyntaxError("", "missing command", MissingCommandError)

    def test_stray_pipe(self):
        for line in ("|", "a |", "| a", "a || b"):
            with self.subTest(line=line):
                self.assertSyntaxError(
                    line,
                    "shell: syntax error near unexpected token '|'",
                    MissingCommandError,
                )

    def test_blank_segment_in_pipeline(self):
        self.assertSyntaxError(
            "a |   | b", "missing command in pipeline", MissingCommandError
        )

    def test_only_redirections(self):
        self.assertSyntaxError("> out.txt", "missing command", MissingCommandError)
        self.assertSyntaxError("&", "missing command", MissingCommandError)

    def test_missing_redirection_target(self):
        self.assertSyntaxError("cat <", "syntax error near unexpected token '<'")
        self.assertSyntaxError("echo hi >", "syntax error near unexpected token '>'")

    def test_duplicate_input(self):
        self.assertSyntaxError("a < f1 < f2", "cannot redirect input more than once")

    def test_duplicate_output(self):
        self.assertSyntaxError("a > f1 > f2", "cannot redirect output more than once")

    def test_background_followed_by_word(self):
        self.assertSyntaxError("a & b", "syntax error near unexpected token '&'")

    def test_background_in_first_stage(self):
        self.assertSyntaxError("a & | b", "'&' can only appear at end of command")

    def test_output_on_first_stage(self):
        error = self.assertSyntaxError(
            "a > out.txt | b",
            "output redirection not allowed for command 1 in pipeline",
        )
        self.assertEqual(error.stage, 1)

    def test_input_on_second_stage(self):
        error = self.assertSyntaxError(
            "a | b < in.txt",
            "input redirection not allowed for command 2 in pipeline",
        )
        self.assertEqual(error.stage, 2)

    def test_too_many_stages(self):
        self.assertSyntaxError(
            " | ".join(["true"] * (MAX_PIPE + 1)),
            f"shell: too many pipeline segments (max {MAX_PIPE})",
        )

    def test_too_many_arguments(self):
        self.assertSyntaxError(
            " ".join(["x"] * MAX_ARGS), f"too many arguments (max {MAX_ARGS - 1})"
        )

    def test_syntax_error_is_a_syntax_error(self):
        with self.assertRaises(SyntaxError):
            parse("a & b")


if __name__ == "__main__":
    unittest.main()
