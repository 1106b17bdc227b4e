"""Core logic for checking a submission link and scoring it."""

import time
from typing import Any, Dict, List, Optional

import config
from utils.logger import get_logger
from utils.error_handler import APIError, GradingError
from services.github_api import GitHubService
from services.web_probe import LinkProber
from services.drive_api import DriveService
from core import classifier, rules

logger = get_logger()

# A single check outcome: passed, message and, for required files, found
CheckResult = Dict[str, Any]
# keys: link, assignmentType, results, score, timestamp
GradeResult = Dict[str, Any]

ALL_FOUND_MESSAGE = "All required file types/extensions found."

def _check(passed: bool, message: str, **extra: Any) -> CheckResult:
    result: CheckResult = {"passed": passed, "message": message}
    result.update(extra)
    return result

class Grader:
    """Runs the accessibility, required-file and structure checks for one link."""

    def __init__(
        self,
        github_service: GitHubService,
        prober: LinkProber,
        drive_service: Optional[DriveService] = None  # Only with GOOGLE_API_KEY
    ):
        self.github_service = github_service
        self.prober = prober
        self.drive_service = drive_service
        logger.info("Grader initialized (Drive API lookups=%s)", bool(drive_service))

    # --- Accessibility ---

    def check_accessibility(self, link: str, link_type: str) -> CheckResult:
        """Reports whether the submission can be reached anonymously."""
        if link_type == classifier.GITHUB_REPO:
            parsed = classifier.parse_github_repo(link)
            if not parsed:
                return _check(False, "Invalid GitHub repo URL.")
            owner, repo = parsed
            try:
                status = self.github_service.get_repo_status(owner, repo)
            except APIError as e:
                logger.warning(f"Accessibility check failed for {link}: {e}")
                return _check(False, "Network error or link not accessible.")
            if status == 200:
                return _check(True, "Repo is public and accessible.")
            if status == 404:
                return _check(False, "Repo not found (may be private or does not exist).")
            if status == 403:
                return _check(False, "API rate limit exceeded. Try again later.")
            return _check(False, f"Repo not accessible. Status: {status}")

        if link_type in (classifier.GITHUB_PAGES, classifier.GOOGLE_DRIVE):
            if self.prober.is_reachable(link):
                return _check(True, "Link is accessible.")
            return _check(False, "Network error or link not accessible.")

        return _check(False, "Unknown link type.")

    # --- Required files ---

    def check_required_files(self, link: str, link_type: str, assignment_type: str) -> CheckResult:
        """Looks for the files the assignment type requires.

        The returned `found` list feeds check_structure: for repositories it
        holds every file path, for Pages sites the paths that answered.
        """
        required = rules.get_rules(assignment_type)

        if link_type == classifier.GITHUB_REPO:
            parsed = classifier.parse_github_repo(link)
            if not parsed:
                return _check(False, "Invalid GitHub repo URL.", found=[])
            try:
                paths = self.github_service.list_repo_files(*parsed)
            except APIError as e:
                logger.warning(f"Listing files failed for {link}: {e}")
                return _check(False, "Error checking files.", found=[])
            _, missing = rules.match_rules(paths, required, assignment_type)
            return self._files_result(missing, paths)

        if link_type == classifier.GITHUB_PAGES:
            found, missing = self._probe_pages(link, required, assignment_type)
            return self._files_result(missing, found)

        if link_type == classifier.GOOGLE_DRIVE:
            return self._check_drive_file(link)

        return _check(False, "Unknown link type.", found=[])

    @staticmethod
    def _files_result(missing: List[str], found: List[str]) -> CheckResult:
        if not missing:
            return _check(True, ALL_FOUND_MESSAGE, found=found)
        return _check(False, f"Missing: {', '.join(missing)}", found=found)

    def _probe_pages(self, link: str, required: List[str], assignment_type: str):
        base = link.rstrip('/')
        found: List[str] = []
        missing: List[str] = []

        for rule in required:
            if rules.is_index_rule(rule, assignment_type):
                candidates = list(rules.INDEX_NAMES)
            elif rules.is_extension_rule(rule):
                candidates = [guess + rule for guess in config.PAGES_GUESSES]
            else:
                candidates = [rule]

            hit = next((c for c in candidates if self.prober.is_reachable(f"{base}/{c}")), None)
            if hit:
                logger.debug(f"Pages site {base} serves {hit} for rule {rule}")
                found.append(hit)
            else:
                missing.append(rules.rule_label(rule, assignment_type))

        return list(dict.fromkeys(found)), list(dict.fromkeys(missing))

    def _check_drive_file(self, link: str) -> CheckResult:
        file_id = classifier.extract_drive_file_id(link)
        if self.drive_service and file_id:
            try:
                metadata = self.drive_service.get_file_metadata(file_id)
                name = metadata.get('name') or link
                logger.info(f"Drive file {file_id} is public: '{name}' ({metadata.get('mimeType')})")
                return _check(True, "File is accessible.", found=[name])
            except (APIError, OSError) as e:
                logger.warning(f"Drive metadata lookup failed for {file_id}: {e}")
                return _check(False, "File not accessible.", found=[])

        if self.prober.is_reachable(link):
            return _check(True, "File is accessible.", found=[link])
        return _check(False, "File not accessible.", found=[])

    # --- Structure ---

    def check_structure(self, link_type: str, assignment_type: str, found_files: List[str]) -> CheckResult:
        """Re-applies the rules to the discovered files and notes project directories."""
        if link_type in (classifier.GITHUB_REPO, classifier.GITHUB_PAGES):
            required = rules.get_rules(assignment_type)
            _, missing = rules.match_rules(found_files, required, assignment_type)
            directories = rules.find_project_dirs(found_files)
            if missing:
                return _check(False, f"Missing file type(s): {', '.join(missing)}", directories=directories)
            return _check(True, "Project structure is correct.", directories=directories)

        if link_type == classifier.GOOGLE_DRIVE:
            return _check(True, "N/A for Google Drive.")

        return _check(False, "Unknown link type.")

    # --- Scoring ---

    @staticmethod
    def calculate_score(results: Dict[str, CheckResult]) -> int:
        """Sums the weights of the passed checks as a whole percentage."""
        score = 0.0
        for key, weight in config.GRADING_WEIGHTS.items():
            if results.get(key, {}).get('passed'):
                score += weight * 100
        return int(round(score))

    def grade(self, link: str, assignment_type: str) -> GradeResult:
        """Runs every check in order and returns the result record.

        Raises:
            GradingError: If the link or the assignment type is blank.
        """
        link = (link or '').strip()
        assignment_type = (assignment_type or '').strip()
        if not link or not assignment_type:
            raise GradingError("Both a submission link and an assignment type are required.")

        link_type = classifier.detect_link_type(link)
        logger.info(f"Grading {link} as '{assignment_type}' (link type: {link_type})")

        accessibility = self.check_accessibility(link, link_type)
        required_files = self.check_required_files(link, link_type, assignment_type)
        structure = self.check_structure(link_type, assignment_type, required_files.get('found') or [])

        results = {
            "accessibility": accessibility,
            "requiredFiles": required_files,
            "structure": structure,
        }
        score = self.calculate_score(results)
        logger.info(f"Finished grading {link}: score {score}%")

        return {
            "link": link,
            "assignmentType": assignment_type,
            "results": results,
            "score": score,
            "timestamp": int(time.time() * 1000),
        }
