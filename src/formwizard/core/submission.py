"""
Ensamblado del registro de envío.
"""

import logging
from typing import Mapping, Optional

from formwizard.errors import IncompleteAnswersError
from formwizard.models.identity import Identity
from formwizard.models.schema import AnswerValue, FormSchema
from formwizard.models.submission import SubmissionRecord

logger = logging.getLogger(__name__)


def assemble(
    schema: FormSchema,
    answers: Mapping[str, AnswerValue],
    identity: Optional[Identity] = None,
) -> SubmissionRecord:
    """
    Produce el registro final con un valor por cada campo del esquema.

    Solo debe invocarse después de que la última sección validó. No realiza
    ningún envío.

    Raises:
        IncompleteAnswersError: si falta algún id de campo en `answers`
    """
    field_ids = schema.field_ids()
    missing = [fid for fid in field_ids if fid not in answers]
    if missing:
        raise IncompleteAnswersError(missing)

    record = SubmissionRecord(
        form_id=schema.identifier,
        form_title=schema.title,
        version=schema.version,
        answers={fid: answers[fid] for fid in field_ids},
        identity=identity,
    )
    logger.info("Assembled submission %s for form %s (%d fields)",
                record.id, schema.identifier, record.n_answers)
    return record
