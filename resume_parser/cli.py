"""
Resume Parser CLI - Command line interface for resume parsing and job matching.

Usage:
    python -m resume_parser [command] [options]

Commands:
    parse       Parse a resume into structured fields
    batch       Parse several resumes in parallel
    search      Search job postings from a file or the jobs API
    match       Score jobs against a parsed resume
    apply       Record an application to a job
    track       View and manage tracked applications
    saved       Manage saved jobs
    config      Manage configuration

Examples:
    python -m resume_parser parse resume.pdf --output resume.json
    python -m resume_parser search --jobs jobs.json --query "front-end dev" --remote
    python -m resume_parser match --resume resume.json --jobs jobs.json
    python -m resume_parser track --user u1 --stats
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from resume_parser.core import (
    ApplicationForm,
    ApplicationStatus,
    JobFilters,
    JobMatcher,
    JobPosting,
    JobSearch,
    ParsedResumeData,
    ResumeParser,
    UploadedFile,
)
from resume_parser.core.fuzzy import DEFAULT_THRESHOLD
from resume_parser.integrations import ClaudeResumeExtractor, JobsApiClient
from resume_parser.tracker import (
    ApplicationTracker,
    ApplicationValidationError,
    InMemoryStorage,
    JsonFileStorage,
    SavedJobs,
)
from resume_parser.utils import Config


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Resume Parser - Resume parsing, job search and application tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="Path to config file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse a resume")
    parse_parser.add_argument("file", help="Resume file (PDF, DOCX, DOC or TXT)")
    parse_parser.add_argument("--ai", action="store_true", help="Use Claude for extraction")
    parse_parser.add_argument("--output", "-o", help="Output file (JSON)")

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Parse several resumes")
    batch_parser.add_argument("files", nargs="+", help="Resume files")
    batch_parser.add_argument("--workers", "-w", type=int, help="Parallel workers")
    batch_parser.add_argument(
        "--timeout",
        type=float,
        help=(
            "Seconds to wait per file. A timed-out file is reported as failed, "
            "but its decoding still runs to completion before the command exits"
        ),
    )
    batch_parser.add_argument("--output", "-o", help="Output file (JSON)")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search job postings")
    source = search_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--jobs", "-j", help="Path to jobs file (JSON)")
    source.add_argument("--api", help="Jobs API base URL")
    search_parser.add_argument("--query", "-q", default="", help="Search term")
    search_parser.add_argument("--type", "-t", action="append", dest="types", help="Job type (repeatable)")
    search_parser.add_argument("--remote", action="store_true", help="Remote jobs only")
    search_parser.add_argument("--location", "-l", default="", help="Location filter")
    search_parser.add_argument("--company", default="", help="Company filter")
    search_parser.add_argument("--page", type=int, default=1, help="Page number")
    search_parser.add_argument("--limit", "-n", type=int, help="Results per page")
    search_parser.add_argument("--sort", choices=sorted(JobSearch.SORT_KEYS), default="posted_date")

    # Match command
    match_parser = subparsers.add_parser("match", help="Match a resume against jobs")
    match_parser.add_argument("--resume", "-r", required=True, help="Resume file or parsed resume JSON")
    match_parser.add_argument("--jobs", "-j", required=True, help="Path to jobs file (JSON)")
    match_parser.add_argument("--top", "-t", type=int, default=10, help="Show top N matches")

    # Apply command
    apply_parser = subparsers.add_parser("apply", help="Record an application")
    apply_parser.add_argument("--user", "-u", required=True, help="User ID")
    apply_parser.add_argument("--job-id", required=True, help="Job ID")
    apply_parser.add_argument("--jobs", "-j", required=True, help="Path to jobs file (JSON)")
    apply_parser.add_argument("--resume", "-r", help="Resume file or parsed resume JSON")
    apply_parser.add_argument("--name", default="", help="Full name")
    apply_parser.add_argument("--email", default="", help="Email address")
    apply_parser.add_argument("--phone", default="", help="Phone number")
    apply_parser.add_argument("--cover-letter", "-c", default="", help="Cover letter text or path to a text file")

    # Track command
    track_parser = subparsers.add_parser("track", help="Track applications")
    track_parser.add_argument("--user", "-u", help="Only this user's applications")
    track_parser.add_argument("--list", "-l", action="store_true", help="List applications")
    track_parser.add_argument("--update", help="Application ID to update")
    track_parser.add_argument("--new-status", help="New status for update")
    track_parser.add_argument("--note", nargs=2, metavar=("ID", "TEXT"), help="Add a note to an application")
    track_parser.add_argument("--stats", action="store_true", help="Show statistics")
    track_parser.add_argument("--export", "-e", help="Export to CSV file")

    # Saved command
    saved_parser = subparsers.add_parser("saved", help="Manage saved jobs")
    saved_parser.add_argument("--user", "-u", required=True, help="User ID")
    saved_parser.add_argument("--add", help="Job ID to save")
    saved_parser.add_argument("--remove", help="Job ID to unsave")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Set API key")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    config = Config(args.config)

    commands = {
        "parse": cmd_parse,
        "batch": cmd_batch,
        "search": cmd_search,
        "match": cmd_match,
        "apply": cmd_apply,
        "track": cmd_track,
        "saved": cmd_saved,
        "config": cmd_config,
    }

    try:
        commands[args.command](args, config)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def build_parser(config: Config, use_ai: bool = False) -> ResumeParser:
    """Create a ResumeParser, with Claude attached when AI parsing is requested."""
    ai_extractor = None
    use_ai = use_ai or config.get("parsing.use_ai", False)

    if use_ai:
        api_key = config.get_api_key("anthropic")
        if api_key:
            ai_extractor = ClaudeResumeExtractor(
                api_key=api_key,
                model=config.get("parsing.ai_model", "claude-3-haiku-20240307"),
            )
        else:
            print("   ⚠️  No Anthropic API key configured, using basic parsing")

    parser = ResumeParser.from_config(config, ai_extractor=ai_extractor)
    parser.use_ai = ai_extractor is not None
    return parser


def build_storage(config: Config):
    if config.get("storage.backend", "json") == "memory":
        return InMemoryStorage()
    return JsonFileStorage(config.get_data_dir())


def load_jobs(path: str) -> list[JobPosting]:
    """Load jobs from a JSON list or a jobs API response dump."""
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("data", data)
        if isinstance(data, dict):
            data = data.get("data", [])

    return [JobPosting.from_dict(item) for item in data]


def load_resume(path: str, config: Config) -> ParsedResumeData:
    """Load a parsed resume JSON file, or parse a resume document."""
    if Path(path).suffix.lower() == ".json":
        with open(path, 'r') as f:
            data = json.load(f)
        return ParsedResumeData.from_dict(data.get("data", data))

    return build_parser(config).parse_path(path)


def print_resume(data: ParsedResumeData) -> None:
    print(f"Name: {data.full_name or '-'}")
    print(f"Email: {data.email or '-'}")
    print(f"Phone: {data.phone or '-'}")
    print(f"Source: {data.source}")
    print(f"\nSkills ({len(data.skills)}):")
    for skill in data.skills:
        print(f"  - {skill}")

    print(f"\nExperience ({len(data.experience)} lines):")
    for line in data.experience[:5]:
        print(f"  - {line}")

    print(f"\nEducation ({len(data.education)} lines):")
    for line in data.education:
        print(f"  - {line}")

    if data.summary:
        print(f"\nSummary: {data.summary}")


def cmd_parse(args, config: Config):
    """Execute parse command."""
    print(f"📄 Parsing {args.file}...")

    parser = build_parser(config, use_ai=args.ai)
    data = parser.parse_path(args.file)

    print("\n📋 Parsed Resume\n")
    print_resume(data)

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(data.to_dict(), f, indent=2)
        print(f"\n💾 Saved parsed resume to: {args.output}")


def cmd_batch(args, config: Config):
    """Execute batch command."""
    workers = args.workers or config.get("parsing.batch_workers", 4)
    print(f"📄 Parsing {len(args.files)} resumes with {workers} workers...")

    parser = build_parser(config)
    files = [UploadedFile.from_path(path) for path in args.files]
    results = parser.parse_batch(files, max_workers=workers, timeout=args.timeout)

    succeeded = 0
    for path, result in zip(args.files, results):
        if result.success:
            succeeded += 1
            print(f"   ✅ {path}: {result.data.full_name or '(no name)'} | {len(result.data.skills)} skills")
        else:
            print(f"   ❌ {path}: {result.error}")

    print(f"\n{succeeded}/{len(results)} parsed successfully")

    if args.output:
        output = {path: result.to_dict() for path, result in zip(args.files, results)}
        with open(args.output, 'w') as f:
            json.dump(output, f, indent=2)
        print(f"💾 Saved results to {args.output}")


def cmd_search(args, config: Config):
    """Execute search command."""
    print("🔍 Searching for jobs...")

    filters = JobFilters(
        search=args.query,
        types=args.types or [],
        remote=args.remote,
        location=args.location,
        company=args.company,
    )
    limit = args.limit or config.get("search.page_limit", 50)

    if args.api:
        client = JobsApiClient(base_url=args.api, token=config.get_api_key("jobs_api") or None)
        jobs, pagination = client.get_jobs(filters, page=args.page, limit=limit)
        total = pagination.get("totalItems", len(jobs))
        total_pages = pagination.get("totalPages", 1)
    else:
        threshold = config.get("search.fuzzy_threshold", DEFAULT_THRESHOLD)
        results = JobSearch(threshold=threshold).search(
            load_jobs(args.jobs), filters, page=args.page, limit=limit, sort_by=args.sort,
        )
        jobs = results.items
        total = results.total_items
        total_pages = results.total_pages

    print(f"\n✅ Found {total} jobs (page {args.page} of {max(total_pages, 1)})\n")

    for i, job in enumerate(jobs, 1):
        salary = ""
        if job.salary_min or job.salary_max:
            salary = f" | ${job.salary_min or '?'}-${job.salary_max or '?'}"

        print(f"{i:2}. {job.title}")
        print(f"    {job.company} | {job.location} | {job.job_type.value}{salary}")
        print(f"    ID: {job.id}")
        print()


def cmd_match(args, config: Config):
    """Execute match command."""
    print("🎯 Matching resume against jobs...")

    resume = load_resume(args.resume, config)
    jobs = load_jobs(args.jobs)
    print(f"   Resume: {resume.full_name or args.resume}")
    print(f"   Skills: {len(resume.skills)} | Jobs to match: {len(jobs)}")

    ranked = JobMatcher(resume).rank_jobs(jobs)

    print(f"\n📊 Top {args.top} Matches:\n")
    print("-" * 80)

    for i, (job, match) in enumerate(ranked[:args.top], 1):
        print(f"\n{i}. {job.title} @ {job.company}")
        print(f"   Location: {job.location}")
        print(f"   📈 Skill Match: {match.score:.0f}%")
        if match.matched_skills:
            print(f"   ✅ Matched Skills: {', '.join(match.matched_skills[:5])}")
        if match.missing_skills:
            print(f"   ❌ Missing Skills: {', '.join(match.missing_skills[:3])}")


def cmd_apply(args, config: Config):
    """Execute apply command."""
    jobs = {job.id: job for job in load_jobs(args.jobs)}
    job = jobs.get(args.job_id)
    if job is None:
        print(f"❌ Job {args.job_id} not found in {args.jobs}")
        return

    tracker = ApplicationTracker(build_storage(config))
    if tracker.has_applied(args.user, job.id):
        print(f"⚠️  Already applied to {job.title} at {job.company}")
        return

    cover_letter = args.cover_letter
    if cover_letter and Path(cover_letter).is_file():
        cover_letter = Path(cover_letter).read_text(encoding="utf-8")

    resume = None
    match = None
    resume_filename = ""
    if args.resume:
        resume = load_resume(args.resume, config)
        match = JobMatcher(resume).match_job(job)
        resume_filename = Path(args.resume).name

    form = ApplicationForm(
        full_name=args.name,
        email=args.email,
        phone=args.phone,
        cover_letter=cover_letter,
        resume_filename=resume_filename,
    )

    try:
        application = tracker.submit(args.user, job, form, resume=resume, match=match)
    except ApplicationValidationError as e:
        print("❌ Application is incomplete:")
        for field_name, message in e.errors.items():
            print(f"   {field_name}: {message}")
        return

    print(f"✅ Applied to {job.title} at {job.company}")
    if match:
        print(f"   Skill Match: {match.score:.0f}%")
    print(f"   ID: {application.id}")


def cmd_track(args, config: Config):
    """Execute track command."""
    tracker = ApplicationTracker(build_storage(config))

    if args.stats:
        stats = tracker.get_statistics(args.user)
        print("\n📊 Application Statistics")
        print("=" * 40)
        print(f"Total Applications: {stats['total']}")
        print(f"Average Match Score: {stats['average_match_score']:.1f}%")
        print(f"Response Rate: {stats['response_rate']:.1f}%")
        print("\nBy Status:")
        for status, count in stats.get('by_status', {}).items():
            print(f"  {status.title()}: {count}")

    elif args.update and args.new_status:
        try:
            status = ApplicationStatus(args.new_status)
        except ValueError:
            print(f"❌ Invalid status: {args.new_status}")
            print(f"   Valid statuses: {[s.value for s in ApplicationStatus]}")
            return

        app = tracker.update_status(args.update, status)
        if app:
            print(f"✅ Updated {app.company} to '{args.new_status}'")
        else:
            print(f"❌ Application {args.update} not found")

    elif args.note:
        application_id, text = args.note
        if tracker.add_note(application_id, text):
            print(f"✅ Added note to {application_id}")
        else:
            print(f"❌ Application {application_id} not found")

    elif args.export:
        path = tracker.export_to_csv(args.export, args.user)
        print(f"✅ Exported to {path}")

    elif args.list:
        applications = tracker.list_for_user(args.user) if args.user else tracker.list_all()

        print(f"\n📋 Applications ({len(applications)} total)\n")
        print("-" * 80)

        for app in applications:
            print(f"\n{app.company} - {app.job_title}")
            print(f"   Status: {app.status.value.title()}")
            if app.match:
                print(f"   Match: {app.match.score:.0f}%")
            print(f"   Applied: {app.applied_at:%Y-%m-%d} | ID: {app.id[:8]}...")

    else:
        # Default: show summary
        stats = tracker.get_statistics(args.user)
        print(f"\n📋 Tracking {stats['total']} applications")
        print(f"   Run 'track --list' to see all")
        print(f"   Run 'track --stats' for statistics")


def cmd_saved(args, config: Config):
    """Execute saved command."""
    saved_jobs = SavedJobs(build_storage(config))

    if args.add:
        saved_jobs.save(args.user, args.add)
        print(f"✅ Saved job {args.add}")

    elif args.remove:
        if saved_jobs.unsave(args.user, args.remove):
            print(f"✅ Removed job {args.remove}")
        else:
            print(f"❌ Job {args.remove} was not saved")

    else:
        saved = saved_jobs.list(args.user)
        print(f"\n⭐ Saved Jobs ({len(saved)})\n")
        for item in saved:
            print(f"  - {item.job_id} (saved {item.saved_at:%Y-%m-%d})")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for complex values
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"✅ Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
