"""Tests for the dialog backends and registry."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from composewiz.dialogs import DialogUnavailable, backend_names, get_dialog, get_dialog_classes
from composewiz.dialogs.qprompt import QuestionaryDialog
from composewiz.dialogs.whiptail import WhiptailDialog
from composewiz.models import CANCELLED

CHECKLIST = [("n8n", "n8n", True), ("qdrant", "Qdrant", False), ("letta", "Letta", False)]
RADIO = [("cpu", "CPU"), ("gpu-nvidia", "NVIDIA"), ("gpu-amd", "AMD")]


def _proc(returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["whiptail"], returncode=returncode,
                                       stdout=None, stderr=stderr)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_backends_registered(self):
        classes = get_dialog_classes()
        assert classes["whiptail"] is WhiptailDialog
        assert classes["questionary"] is QuestionaryDialog

    def test_backend_names(self):
        assert backend_names() == ["auto", "whiptail", "questionary"]

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown dialog backend"):
            get_dialog("zenity")

    def test_auto_prefers_whiptail(self):
        with patch.object(WhiptailDialog, "available", return_value=True), \
             patch.object(QuestionaryDialog, "available", return_value=True):
            assert isinstance(get_dialog("auto"), WhiptailDialog)

    def test_auto_falls_back_to_questionary(self):
        with patch.object(WhiptailDialog, "available", return_value=False), \
             patch.object(QuestionaryDialog, "available", return_value=True):
            assert isinstance(get_dialog("auto"), QuestionaryDialog)

    def test_auto_nothing_available(self):
        with patch.object(WhiptailDialog, "available", return_value=False), \
             patch.object(QuestionaryDialog, "available", return_value=False):
            with pytest.raises(DialogUnavailable) as exc:
                get_dialog("auto")
        assert "apt-get install whiptail" in exc.value.hint

    def test_named_backend_unavailable(self):
        with patch.object(QuestionaryDialog, "available", return_value=False):
            with pytest.raises(DialogUnavailable) as exc:
                get_dialog("questionary")
        assert "terminal" in exc.value.hint


# ---------------------------------------------------------------------------
# whiptail
# ---------------------------------------------------------------------------

class TestWhiptailDialog:
    def test_available_uses_which(self):
        with patch("composewiz.dialogs.whiptail.sys.stdin") as stdin, \
             patch("composewiz.dialogs.whiptail.sys.stdout") as stdout:
            stdin.isatty.return_value = True
            stdout.isatty.return_value = True
            with patch("composewiz.dialogs.whiptail.shutil.which",
                       return_value="/usr/bin/whiptail"):
                assert WhiptailDialog().available() is True
            with patch("composewiz.dialogs.whiptail.shutil.which", return_value=None):
                assert WhiptailDialog().available() is False

    @pytest.mark.parametrize("stdin_tty,stdout_tty", [(False, True), (True, False)])
    def test_unavailable_without_terminal(self, stdin_tty, stdout_tty):
        """Installed whiptail still cannot prompt when stdin or stdout is redirected."""
        with patch("composewiz.dialogs.whiptail.shutil.which", return_value="/usr/bin/whiptail"), \
             patch("composewiz.dialogs.whiptail.sys.stdin") as stdin, \
             patch("composewiz.dialogs.whiptail.sys.stdout") as stdout:
            stdin.isatty.return_value = stdin_tty
            stdout.isatty.return_value = stdout_tty
            assert WhiptailDialog().available() is False

    def test_no_terminal_is_unavailable_not_cancelled(self):
        """Piped runs must fail the availability check rather than reach _run."""
        with patch("composewiz.dialogs.whiptail.shutil.which", return_value="/usr/bin/whiptail"), \
             patch("composewiz.dialogs.whiptail.sys.stdin") as stdin, \
             patch.object(QuestionaryDialog, "available", return_value=False), \
             patch("composewiz.dialogs.whiptail.subprocess.run") as mock_run:
            stdin.isatty.return_value = False
            with pytest.raises(DialogUnavailable):
                get_dialog("auto")
        mock_run.assert_not_called()

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_checklist_parses_quoted_output(self, mock_run):
        mock_run.return_value = _proc(stderr='"n8n" "letta"')
        result = WhiptailDialog().select_multiple("Title", "Pick", CHECKLIST)
        assert result == ["n8n", "letta"]

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_checklist_args(self, mock_run):
        mock_run.return_value = _proc(stderr="")
        WhiptailDialog().select_multiple("Title", "Pick", CHECKLIST)
        args = mock_run.call_args[0][0]
        assert args[:4] == ["whiptail", "--title", "Title", "--checklist"]
        assert args[-9:] == ["n8n", "n8n", "ON", "qdrant", "Qdrant", "OFF",
                             "letta", "Letta", "OFF"]
        assert mock_run.call_args[1]["env"]["DEBIAN_FRONTEND"] == "dialog"
        assert mock_run.call_args[1]["stderr"] == subprocess.PIPE

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_checklist_empty_confirm(self, mock_run):
        mock_run.return_value = _proc(stderr="")
        assert WhiptailDialog().select_multiple("T", "t", CHECKLIST) == []

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_checklist_cancel(self, mock_run):
        mock_run.return_value = _proc(returncode=1)
        assert WhiptailDialog().select_multiple("T", "t", CHECKLIST) is CANCELLED

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_checklist_escape(self, mock_run):
        mock_run.return_value = _proc(returncode=255)
        assert WhiptailDialog().select_multiple("T", "t", CHECKLIST) is CANCELLED

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_radiolist_default_on(self, mock_run):
        mock_run.return_value = _proc(stderr="gpu-amd")
        result = WhiptailDialog().select_one("T", "t", RADIO, "cpu")
        assert result == "gpu-amd"
        args = mock_run.call_args[0][0]
        assert "--radiolist" in args
        assert args[-9:] == ["cpu", "CPU", "ON", "gpu-nvidia", "NVIDIA", "OFF",
                             "gpu-amd", "AMD", "OFF"]

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_radiolist_cancel(self, mock_run):
        mock_run.return_value = _proc(returncode=1)
        assert WhiptailDialog().select_one("T", "t", RADIO, "cpu") is CANCELLED

    @patch("composewiz.dialogs.whiptail.subprocess.run")
    def test_radiolist_no_choice(self, mock_run):
        mock_run.return_value = _proc(stderr="")
        assert WhiptailDialog().select_one("T", "t", RADIO, "cpu") is CANCELLED


# ---------------------------------------------------------------------------
# questionary
# ---------------------------------------------------------------------------

class TestQuestionaryDialog:
    def test_available_requires_tty(self):
        with patch("composewiz.dialogs.qprompt.sys.stdin") as stdin, \
             patch("composewiz.dialogs.qprompt.sys.stdout") as stdout:
            stdin.isatty.return_value = True
            stdout.isatty.return_value = False
            assert QuestionaryDialog().available() is False
            stdout.isatty.return_value = True
            assert QuestionaryDialog().available() is True

    def test_checkbox_choices_checked(self):
        with patch("composewiz.dialogs.qprompt.questionary.checkbox") as mock_cb:
            mock_cb.return_value.ask.return_value = ["n8n"]
            result = QuestionaryDialog().select_multiple("T", "t", CHECKLIST)
        assert result == ["n8n"]
        choices = mock_cb.call_args[1]["choices"]
        assert [c.value for c in choices] == ["n8n", "qdrant", "letta"]
        assert [c.checked for c in choices] == [True, False, False]

    def test_checkbox_keeps_list_order(self):
        with patch("composewiz.dialogs.qprompt.questionary.checkbox") as mock_cb:
            mock_cb.return_value.ask.return_value = ["letta", "n8n"]
            assert QuestionaryDialog().select_multiple("T", "t", CHECKLIST) == ["n8n", "letta"]

    def test_checkbox_cancel(self):
        with patch("composewiz.dialogs.qprompt.questionary.checkbox") as mock_cb:
            mock_cb.return_value.ask.return_value = None
            assert QuestionaryDialog().select_multiple("T", "t", CHECKLIST) is CANCELLED

    def test_checkbox_interrupt(self):
        with patch("composewiz.dialogs.qprompt.questionary.checkbox") as mock_cb:
            mock_cb.return_value.ask.side_effect = KeyboardInterrupt
            assert QuestionaryDialog().select_multiple("T", "t", CHECKLIST) is CANCELLED

    def test_select_default(self):
        with patch("composewiz.dialogs.qprompt.questionary.select") as mock_sel:
            mock_sel.return_value.ask.return_value = "gpu-nvidia"
            assert QuestionaryDialog().select_one("T", "t", RADIO, "cpu") == "gpu-nvidia"
        assert mock_sel.call_args[1]["default"] == "cpu"

    def test_select_cancel(self):
        with patch("composewiz.dialogs.qprompt.questionary.select") as mock_sel:
            mock_sel.return_value.ask.return_value = None
            assert QuestionaryDialog().select_one("T", "t", RADIO, "cpu") is CANCELLED

    def test_select_eof(self):
        mock_question = MagicMock()
        mock_question.ask.side_effect = EOFError
        with patch("composewiz.dialogs.qprompt.questionary.select", return_value=mock_question):
            assert QuestionaryDialog().select_one("T", "t", RADIO, "cpu") is CANCELLED
