"""Tests for core.grader."""

import httplib2
import pytest

import config
from core import classifier
from core.grader import Grader
from services.drive_api import DriveService
from utils.error_handler import APIError, GradingError

REPO = "https://github.com/octo/site"
PAGES = "https://octo.github.io/site/"
DRIVE = "https://drive.google.com/file/d/FILE123/view"


class FakeGitHub:
    def __init__(self, status=200, files=None, error=None):
        self.status = status
        self.files = files or []
        self.error = error

    def get_repo_status(self, owner, repo):
        if self.error:
            raise self.error
        return self.status

    def list_repo_files(self, owner, repo):
        if self.error:
            raise self.error
        return list(self.files)


class FakeProber:
    def __init__(self, reachable=(), everything=False):
        self.reachable = set(reachable)
        self.everything = everything
        self.probed = []

    def is_reachable(self, url):
        self.probed.append(url)
        return self.everything or url in self.reachable


class FakeDrive:
    def __init__(self, metadata=None, error=None):
        self.metadata = metadata
        self.error = error

    def get_file_metadata(self, file_id):
        if self.error:
            raise self.error
        return self.metadata


def make_grader(github=None, prober=None, drive=None):
    return Grader(github or FakeGitHub(), prober or FakeProber(), drive)


class TestAccessibility:

    @pytest.mark.parametrize(
        "status,passed,message",
        [
            (200, True, "Repo is public and accessible."),
            (404, False, "Repo not found (may be private or does not exist)."),
            (403, False, "API rate limit exceeded. Try again later."),
            (500, False, "Repo not accessible. Status: 500"),
        ],
    )
    def test_repo_status_messages(self, status, passed, message):
        result = make_grader(FakeGitHub(status=status)).check_accessibility(REPO, classifier.GITHUB_REPO)
        assert result == {"passed": passed, "message": message}

    def test_repo_network_error(self):
        grader = make_grader(FakeGitHub(error=APIError("down", service="github")))
        result = grader.check_accessibility(REPO, classifier.GITHUB_REPO)
        assert result == {"passed": False, "message": "Network error or link not accessible."}

    def test_invalid_repo_url(self):
        result = make_grader().check_accessibility("https://github.com/octo", classifier.GITHUB_REPO)
        assert result["message"] == "Invalid GitHub repo URL."

    @pytest.mark.parametrize("link,link_type", [(PAGES, classifier.GITHUB_PAGES), (DRIVE, classifier.GOOGLE_DRIVE)])
    def test_probed_links(self, link, link_type):
        assert make_grader(prober=FakeProber(everything=True)).check_accessibility(link, link_type)["passed"]
        result = make_grader(prober=FakeProber()).check_accessibility(link, link_type)
        assert result == {"passed": False, "message": "Network error or link not accessible."}

    def test_unknown(self):
        result = make_grader().check_accessibility("https://example.com", classifier.UNKNOWN)
        assert result == {"passed": False, "message": "Unknown link type."}


class TestRequiredFiles:

    def test_repo_all_found(self):
        files = ["index.html", "css/site.css", "js/app.js", "README.md"]
        result = make_grader(FakeGitHub(files=files)).check_required_files(
            REPO, classifier.GITHUB_REPO, "Web Development")
        assert result["passed"] is True
        assert result["message"] == "All required file types/extensions found."
        assert result["found"] == files

    def test_repo_missing(self):
        result = make_grader(FakeGitHub(files=["analysis.ipynb"])).check_required_files(
            REPO, classifier.GITHUB_REPO, "Data Analysis")
        assert result["passed"] is False
        assert result["message"] == "Missing: .csv, README.md"

    def test_repo_listing_error(self):
        grader = make_grader(FakeGitHub(error=APIError("boom")))
        result = grader.check_required_files(REPO, classifier.GITHUB_REPO, "Data Analysis")
        assert result == {"passed": False, "message": "Error checking files.", "found": []}

    def test_pages_probes_guesses_until_one_answers(self):
        base = PAGES.rstrip("/")
        prober = FakeProber(reachable={f"{base}/main.py", f"{base}/log.txt", f"{base}/README.md"})
        result = make_grader(prober=prober).check_required_files(PAGES, classifier.GITHUB_PAGES, "Generative AI")
        assert result["passed"] is True
        assert result["found"] == ["main.py", "log.txt", "README.md"]
        # Guesses stop at the first hit for .py
        assert f"{base}/script.py" not in prober.probed

    def test_pages_missing(self):
        base = PAGES.rstrip("/")
        prober = FakeProber(reachable={f"{base}/index.html"})
        result = make_grader(prober=prober).check_required_files(PAGES, classifier.GITHUB_PAGES, "Web Development")
        assert result["passed"] is False
        assert result["message"] == "Missing: .css, .js, README.md"
        assert result["found"] == ["index.html"]

    def test_pages_index_rule_tries_php(self, monkeypatch):
        monkeypatch.setitem(config.DEFAULT_RULES, "Web Development", ["index.html"])
        base = PAGES.rstrip("/")
        prober = FakeProber(reachable={f"{base}/index.php"})
        result = make_grader(prober=prober).check_required_files(PAGES, classifier.GITHUB_PAGES, "Web Development")
        assert result["passed"] is True
        assert result["found"] == ["index.php"]

    def test_drive_probe(self):
        result = make_grader(prober=FakeProber(everything=True)).check_required_files(
            DRIVE, classifier.GOOGLE_DRIVE, "Graphics/Design")
        assert result == {"passed": True, "message": "File is accessible.", "found": [DRIVE]}
        result = make_grader().check_required_files(DRIVE, classifier.GOOGLE_DRIVE, "Graphics/Design")
        assert result == {"passed": False, "message": "File not accessible.", "found": []}

    def test_drive_api_lookup_preferred(self):
        prober = FakeProber()
        drive = FakeDrive({"id": "FILE123", "name": "poster.png", "mimeType": "image/png"})
        result = make_grader(prober=prober, drive=drive).check_required_files(
            DRIVE, classifier.GOOGLE_DRIVE, "Graphics/Design")
        assert result == {"passed": True, "message": "File is accessible.", "found": ["poster.png"]}
        assert prober.probed == []

    def test_drive_api_private_file(self):
        drive = FakeDrive(error=APIError("nope", status_code=404, service="drive"))
        result = make_grader(drive=drive).check_required_files(DRIVE, classifier.GOOGLE_DRIVE, "Graphics/Design")
        assert result["passed"] is False

    def test_unknown(self):
        result = make_grader().check_required_files("https://example.com", classifier.UNKNOWN, "Data Analysis")
        assert result == {"passed": False, "message": "Unknown link type.", "found": []}


class TestStructure:

    def test_correct_structure_lists_directories(self):
        found = ["src/main.py", "data/notes.txt", "README.md"]
        result = make_grader().check_structure(classifier.GITHUB_REPO, "Cybersecurity", found)
        assert result == {"passed": True, "message": "Project structure is correct.", "directories": ["src"]}

    def test_missing(self):
        result = make_grader().check_structure(classifier.GITHUB_PAGES, "Graphics/Design", ["logo.png"])
        assert result["passed"] is False
        assert result["message"] == "Missing file type(s): .psd, README.md"

    def test_drive_not_applicable(self):
        assert make_grader().check_structure(classifier.GOOGLE_DRIVE, "Data Analysis", []) == {
            "passed": True, "message": "N/A for Google Drive."}

    def test_unknown_fails(self):
        assert make_grader().check_structure(classifier.UNKNOWN, "Data Analysis", [])["passed"] is False


@pytest.mark.parametrize(
    "flags,expected",
    [
        ((True, True, True), 100),
        ((True, False, False), 40),
        ((False, True, True), 60),
        ((True, True, False), 70),
        ((False, False, False), 0),
    ],
)
def test_calculate_score(flags, expected):
    keys = ("accessibility", "requiredFiles", "structure")
    results = {k: {"passed": f, "message": ""} for k, f in zip(keys, flags)}
    assert Grader.calculate_score(results) == expected


class TestGrade:

    def test_full_record(self):
        files = ["main.py", "requirements.txt", "README.md"]
        result = make_grader(FakeGitHub(files=files)).grade(f"  {REPO}  ", "Generative AI")
        assert result["link"] == REPO
        assert result["assignmentType"] == "Generative AI"
        assert set(result["results"]) == {"accessibility", "requiredFiles", "structure"}
        assert result["score"] == 100
        assert isinstance(result["timestamp"], int)

    def test_private_repo_scores_zero(self):
        result = make_grader(FakeGitHub(status=404)).grade(REPO, "Generative AI")
        assert result["score"] == 0

    def test_drive_without_rules_gets_structure_credit(self):
        result = make_grader(prober=FakeProber(everything=True)).grade(DRIVE, "Data Analysis")
        assert result["score"] == 100

    @pytest.mark.parametrize("link,assignment_type", [("", "Data Analysis"), (REPO, ""), ("   ", "x")])
    def test_blank_input_rejected(self, link, assignment_type):
        with pytest.raises(GradingError):
            make_grader().grade(link, assignment_type)


def test_drive_transport_failure_degrades_to_not_accessible():
    class UnreachableFiles:
        def get(self, **kwargs):
            return self

        def execute(self):
            raise httplib2.ServerNotFoundError("Unable to find the server")

    class UnreachableDrive:
        def files(self):
            return UnreachableFiles()

    drive = DriveService(service=UnreachableDrive())
    result = make_grader(drive=drive).grade(DRIVE, "Graphics/Design")
    assert result["results"]["requiredFiles"] == {"passed": False, "message": "File not accessible.", "found": []}
