from django.core.checks import ERROR
from django.core.management.base import BaseCommand, CommandError

from procedures.catalogue import CATALOGUE, Category
from procedures.checks import catalogue_messages
from procedures.display import category_display


class Command(BaseCommand):
    help = "List the procedure catalogue with its cross-references; --check validates integrity."

    def add_arguments(self, parser):
        parser.add_argument(
            "--category",
            choices=[c.value for c in Category],
            help="Only list procedures of this category.",
        )
        parser.add_argument(
            "--check",
            action="store_true",
            help="Run the catalogue integrity checks and fail on errors.",
        )

    def handle(self, *args, **options):
        categories = [Category(options["category"])] if options["category"] else list(Category)

        for category in categories:
            procedures = CATALOGUE.get_by_category(category)
            self.stdout.write(self.style.MIGRATE_HEADING(
                f"{category_display(category).label} ({len(procedures)})"
            ))
            for proc in procedures:
                self.stdout.write(f"  {proc.id:<8} {proc.title}")
                for cond in proc.conditionals:
                    if cond.has_reference:
                        self.stdout.write(f"           -> {cond.reference_id}  if: {cond.condition}")

        edges = sum(1 for _ in CATALOGUE.references())
        self.stdout.write(f"\n{len(CATALOGUE)} procedures, {edges} cross-references.")

        if not options["check"]:
            return

        messages = catalogue_messages()
        for msg in messages:
            style = self.style.ERROR if msg.level >= ERROR else self.style.WARNING
            self.stderr.write(style(f"{msg.id}: {msg.msg}"))

        errors = [m for m in messages if m.level >= ERROR]
        if errors:
            raise CommandError(f"Catalogue integrity check failed with {len(errors)} error(s).")

        self.stdout.write(self.style.SUCCESS("Catalogue integrity OK."))
