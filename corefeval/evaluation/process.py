# Copyright 2017 Neural Networks and Deep Learning lab, MIPT
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import shlex
import subprocess
import threading
import time

logger = logging.getLogger(__name__)

READ_BUFFER_SIZE = 1024 * 4
READ_RETRY_DELAY = 0.01
MAX_READ_ERRORS = 10


def _drain(process, stream, chunks):
    """reads stream until its end, retries a few times after errors while process is alive"""
    errors = 0
    while True:
        try:
            chunk = stream.read(READ_BUFFER_SIZE)
        except OSError as e:
            errors += 1
            logger.error('error while reading output of pid %d: %s', process.pid, e)
            if process.poll() is None and errors < MAX_READ_ERRORS:
                time.sleep(READ_RETRY_DELAY)
                continue
            break
        errors = 0
        if not chunk:
            break
        chunks.append(chunk)


def exec_external_command(cmd, cwd=None):
    """
    Calls an external command and collects its standard output.
    Args:
        cmd: list of arguments, or a string which is split like a shell does
        cwd: working directory of the command

    Returns:
        standard output as a string, available after the command has terminated

    Raises OSError if the command cannot be started. Standard error is not captured.
    """
    if isinstance(cmd, str):
        cmd = shlex.split(cmd)
    logger.debug('executing command: %s', ' '.join(cmd))
    process = subprocess.Popen(cmd, stdout=subprocess.PIPE, cwd=cwd)
    chunks = []
    reader = threading.Thread(target=_drain, args=(process, process.stdout, chunks), daemon=True)
    reader.start()
    returncode = process.wait()
    reader.join()
    process.stdout.close()
    logger.debug('command %s exited with code %d', cmd[0], returncode)
    return b''.join(chunks).decode('utf8', errors='replace')
