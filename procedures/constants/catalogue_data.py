# procedures/constants/catalogue_data.py
"""
Operating procedures for UAS flight operations.

Plain authoring data. ``procedures.catalogue`` turns these records into the
immutable ``CATALOGUE`` at import time. Steps starting with ``"Call Out:"``
are verbal call-outs.
"""

GENERAL_RULES = [
    "A minimum flight height of 8 metres is maintained to minimise the risk to people, animals and vehicles, unless the mission requires a lower height.",
    "As a rule the minimum flight height is only undercut for take-off, landing or during contingency/emergency procedures when considered necessary.",
    "Training flights over controlled ground are exempt.",
]


PROCEDURE_RECORDS = [
    # -----------------------------------------------------------------
    # Normal procedures (N1–N6)
    # -----------------------------------------------------------------
    {
        "id": "N1",
        "title": "Before take-off",
        "short_title": "Before take-off",
        "category": "normal",
        "description": "Preparatory checks and motor start before lifting off.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Pre-flight inspection completed",
                    "Check controlled ground established",
                    "Check GNSS available (if required)",
                    "Check take-off area clear (e.g. people, FOD or obstacles)",
                    "Call Out: CLEAR PROP!",
                    "Start motors (push both sticks down and inwards, release once the motors spin)",
                    "Check initialisation completed",
                    "Check for error messages or unusual behaviour/noise",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Error message or unusual behaviour/noise",
                "action": "Stop motors (hold throttle stick at 6 o'clock until the motors stop) and abort the procedure",
            },
        ],
    },
    {
        "id": "N2",
        "title": "Take-off",
        "short_title": "Take-off",
        "category": "normal",
        "description": "Take-off is always flown under manual control.",
        "general_notes": [
            "No warnings or error messages?",
            "Start rotors with the combination stick command (CSC)",
            "Rotors running evenly, no unusual vibration?",
            "Increase RPM and climb steadily to at least 7 metres",
            "Perform a control check",
        ],
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Check departure direction clear",
                    "Check airspace",
                    "Call Out: ATTENTION: TAKE-OFF!",
                    "Take off",
                    "At a safe height, check that the UAS responds normally (as expected)",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "UAS response not normal",
                "action": "Land ASAP",
                "reference_id": "N6",
            },
        ],
    },
    {
        "id": "N3",
        "title": "Flight",
        "short_title": "Flight",
        "category": "normal",
        "description": "Mission flight, manual or autonomous.",
        "general_notes": [
            "N3.1 Mission flight (manual control): flight mode P (positioning) as a rule. Flight mode T (tripod) near obstacles or people. Flight mode S (sport) only in exceptional cases.",
            "N3.2 Autonomous mission flight: flight mode P. Plan reviewed by two people beforehand. Continuous monitoring by pilot and airspace observer. Abort immediately on any deviation.",
        ],
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Fly the UAS (manual control or automatic flight)",
                    "Monitor: flight parameters (height, speed, battery, C2/C3 link, ...)",
                    "Monitor: correct execution of the automatic flight plan (if active)",
                    "Observe: weather changes",
                    "Observe: ground area for uninvolved persons and obstacles",
                    "Observe: airspace",
                ],
            },
            {
                "role": "Ground crew",
                "steps": [
                    "Observe: weather changes",
                    "Observe: ground area for uninvolved persons and obstacles",
                    "Observe: airspace",
                    "Inform the RPIC of changes if necessary",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Deviation from the automatic flight plan",
                "action": "Take manual control",
                "reference_id": "N4",
            },
            {
                "condition": "Uninvolved UAV appears",
                "action": "See procedure C4.1",
                "reference_id": "C4.1",
            },
            {
                "condition": "Manned aircraft appears",
                "action": "See procedure C4.2",
                "reference_id": "C4.2",
            },
        ],
    },
    {
        "id": "N4",
        "title": "Taking manual control",
        "short_title": "Manual control",
        "category": "normal",
        "description": "Whenever safe flight under automatic control is in doubt, or whenever the RPIC considers it necessary.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Switch flight mode to manual control",
                    "Check manual control established",
                    "Call Out: MANUAL CONTROL TAKEN!",
                    "Return to safe height and distance",
                ],
            },
        ],
    },
    {
        "id": "N5",
        "title": "Handing control to the co-pilot",
        "short_title": "Handover",
        "category": "normal",
        "description": "Control passes from the RPIC to the RP, who thereby becomes RPIC. The change must be documented.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Check the RP is standing nearby or in radio contact and ready",
                    "Call Out: HANDING OVER CONTROL!",
                    "Press the aircraft authority button until it lights red",
                ],
            },
            {
                "role": "RP",
                "steps": [
                    "Press the aircraft authority button until it lights green",
                    "Call Out: CONTROL TAKEN!",
                ],
            },
        ],
    },
    {
        "id": "N6",
        "title": "Landing",
        "short_title": "Landing",
        "category": "normal",
        "description": "Landing is normally flown under manual control.",
        "general_notes": [
            "Approach the landing zone",
            "Landing zone clear?",
            "Descend to about 8 metres",
            "Align the aircraft (tail towards the pilot)",
            "Descend over the landing zone",
            "Land",
            "Landing on reflective surfaces (especially at night) may require a forced landing. Alternatively disable downward vision positioning briefly.",
            "If needed, stop the rotors with the combination stick command (CSC)",
        ],
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Check approach path clear",
                    "Check landing site clear",
                    "Call Out: ATTENTION: LANDING!",
                    "Land",
                    "Once the UAS is safely on the ground: stop motors (hold throttle stick at 6 o'clock until the motors stop)",
                ],
            },
        ],
    },
    # -----------------------------------------------------------------
    # Contingency procedures (C0–C6)
    # -----------------------------------------------------------------
    {
        "id": "C0",
        "title": "Unexpected adverse weather",
        "short_title": "Adverse weather",
        "category": "contingency",
        "description": "Safety of everyone involved has top priority. The RPIC decides between aborting and the safest way to end the flight.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Call Out: ADVERSE WEATHER!",
                    "In automatic flight: take manual control (N4)",
                    "Land (N6)",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Weather so adverse that controlled flight is no longer possible",
                "action": "Termination",
                "reference_id": "E1",
            },
        ],
    },
    {
        "id": "C1",
        "title": "Unexpected UAS behaviour inside the flight geography",
        "short_title": "Unexpected behaviour",
        "category": "contingency",
        "description": "The UAS behaves differently than expected, e.g. leaves the flight path in automatic mode.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Call Out: WARNING! WARNING! WARNING!",
                    "In automatic flight: take manual control (N4)",
                    "Land (N6)",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Expected behaviour cannot be restored",
                "action": "Termination (controlled crash) with the combination stick command (CSC)",
                "reference_id": "E1",
            },
        ],
        "notes": [
            "Flight operations may only resume once the cause has been found and it is certain it cannot recur.",
        ],
    },
    {
        "id": "C2",
        "title": "Lateral contingency manoeuvre: stop",
        "short_title": "Lateral exit",
        "category": "contingency",
        "description": "The UA leaves the flight geography laterally.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "In automatic flight: take manual control (N4)",
                    "Stop lateral movement of the UA",
                    "Fly the UA back into the flight geography",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "UA cannot be flown back or is about to leave the contingency volume",
                "action": "Termination",
                "reference_id": "E1",
            },
        ],
    },
    {
        "id": "C3",
        "title": "Vertical contingency manoeuvre: descend or climb",
        "short_title": "Vertical exit",
        "category": "contingency",
        "description": "The UA leaves the flight geography vertically.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "In automatic flight: take manual control (N4)",
                    "Stop vertical movement of the UA",
                    "Fly the UA back into the flight geography",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "UA cannot be flown back or is about to leave the contingency volume",
                "action": "Termination",
                "reference_id": "E1",
            },
        ],
    },
    {
        "id": "C4.1",
        "title": "Uninvolved UAV appears",
        "short_title": "Foreign UAV",
        "category": "contingency",
        "description": "A foreign UAS is about to enter, or has entered, the operational volume.",
        "actions": [
            {"role": "RPIC or ground crew", "steps": ["Call Out: UNKNOWN UAV!"]},
            {"role": "RPIC", "steps": ["Initiate landing of the UA: Landing (N6)"]},
        ],
        "notes": [
            "Operations may only resume once it is certain the conflict will not recur.",
        ],
    },
    {
        "id": "C4.2",
        "title": "Manned aircraft appears",
        "short_title": "Manned aircraft",
        "category": "contingency",
        "description": "A manned aircraft is about to enter, or has entered, the operational volume.",
        "actions": [
            {"role": "RPIC or ground crew", "steps": ["Call Out: UNKNOWN AIRCRAFT!"]},
            {
                "role": "RPIC",
                "steps": [
                    "Initiate landing of the UA: Landing (N6)",
                    "File a report as required by the reporting rules",
                ],
            },
        ],
        "notes": [
            "Operations may only resume once it is certain the conflict will not recur.",
        ],
    },
    {
        "id": "C5",
        "title": "Loss of controlled ground",
        "short_title": "Controlled ground",
        "category": "contingency",
        "description": "Uninvolved persons have entered the area designated as controlled ground.",
        "actions": [
            {"role": "RPIC or ground crew", "steps": ["Call Out: UNINVOLVED PERSONS IN THE FLIGHT AREA!"]},
            {"role": "Ground crew", "steps": ["If necessary: clear a safety area around the landing zone"]},
            {"role": "RPIC", "steps": ["Initiate landing of the UA: Landing (N6)"]},
        ],
        "notes": [
            "Operations may only resume once it is certain the conflict will not recur.",
        ],
    },
    {
        "id": "C6",
        "title": "Link loss",
        "short_title": "Link loss",
        "category": "contingency",
        "description": "The C2 link to the UAS is interrupted.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Call Out: LINK LOSS!",
                    "Check the signal and try to re-establish the link",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "UA is about to leave the contingency volume",
                "action": "Termination",
                "reference_id": "E1",
            },
        ],
    },
    # -----------------------------------------------------------------
    # Emergency procedures (E1–E3)
    # -----------------------------------------------------------------
    {
        "id": "E1",
        "title": "Flight termination",
        "short_title": "Termination",
        "category": "emergency",
        "description": "At the latest when leaving the contingency volume, or whenever the remote pilot considers it necessary to minimise an identified risk to people.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Terminate the aircraft with the combination stick command (CSC)",
                    "Call Out: CRASH! CRASH! CRASH!",
                    "Note last position and heading of the UA",
                ],
            },
            {
                "role": "Ground crew",
                "steps": [
                    "Take cover",
                    "If necessary, warn other people loudly",
                    "Call Out: TAKE COVER!",
                    "Note last position and heading of the UA",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Termination successful?",
                "action": "Yes: Crash (E3) / No: Fly-away (E2)",
            },
        ],
    },
    {
        "id": "E2",
        "title": "Fly-away",
        "short_title": "Fly-away",
        "category": "emergency",
        "description": "The UAS does not respond to termination and keeps flying uncontrolled.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Call Out: FLY-AWAY! FLY-AWAY! FLY-AWAY!",
                    "Trigger the ERP: fly-away response plan (ERP-FA)",
                    "Retry termination (E1) in parallel with the ERP, as long as the ERP is not delayed",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Trigger ERP",
                "action": "Follow the fly-away response plan",
                "reference_id": "ERP-FA",
            },
        ],
    },
    {
        "id": "E3",
        "title": "Crash",
        "short_title": "Crash",
        "category": "emergency",
        "description": "After the UAS has hit the ground.",
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "Call Out: CRASH! CRASH! CRASH!",
                    "Trigger the ERP: crash response plan (ERP-ABS)",
                ],
            },
        ],
        "conditionals": [
            {
                "condition": "Trigger ERP",
                "action": "Follow the crash response plan",
                "reference_id": "ERP-ABS",
            },
        ],
    },
    # -----------------------------------------------------------------
    # Emergency response plan (ERP)
    # -----------------------------------------------------------------
    {
        "id": "ERP",
        "title": "Emergency response plan",
        "short_title": "ERP general",
        "category": "erp",
        "description": "Even though safe UAS operation is the first goal, incidents or accidents can happen. The first task is to limit their effects. People first, then property!",
        "general_notes": [
            "Stay calm and get an overview",
            "Mind your own safety",
            "Secure the accident site",
            "Move people out of the danger zone",
            "Report the emergency",
            "Give first aid",
            "Everyone helps as far as they can without putting themselves at risk.",
            "Every flight operation carries PPE, a first-aid kit to DIN 13157 and a fire extinguisher to DIN EN 3.",
            "First-aid kit: support vehicle, under the centre worktop",
            "Fire extinguisher: support vehicle, under the centre worktop",
        ],
        "actions": [
            {
                "role": "All",
                "steps": [
                    "The ERP is briefed to everyone involved before operations",
                    "Operations only start once all questions about the ERP are answered",
                ],
            },
        ],
        "notes": [
            "The ERP was validated in a table-top exercise with all role holders (M3Crit1bAs).",
            "The ERP fits the situation, limits consequential effects, defines how emergencies are identified, is practicable and assigns responsibilities clearly (M3Int).",
        ],
    },
    {
        "id": "ERP-ABS",
        "title": "Response plan for a UAS crash",
        "short_title": "ERP crash",
        "category": "erp",
        "description": "Step-by-step response after a UAS crash. Ground rules: stay calm. Rescue people before property.",
        "actions": [
            {
                "role": "All",
                "steps": [
                    "1. GET AN OVERVIEW: reach the accident site as quickly as possible, secure it, mind your own safety",
                ],
            },
            {
                "role": "All",
                "steps": [
                    "2. If people are affected: RESCUE, move people out of the danger zone, keep a safe distance, mind your own safety",
                ],
            },
            {
                "role": "All",
                "steps": [
                    "3. If necessary: CALL EMERGENCY SERVICES. Who is calling? Where did it happen? What happened? How many injured? Wait for questions!",
                ],
            },
            {
                "role": "All",
                "steps": [
                    "4. If necessary: FIGHT FIRE. Do not put yourself at risk, fight the fire (extinguisher or fire blanket), take special care with batteries, risk of explosion! Brief arriving fire services",
                ],
            },
            {
                "role": "All",
                "steps": [
                    "5. If necessary: GIVE FIRST AID. Check casualties for signs of life, resuscitate on cardiac arrest, stop bleeding, recovery position, brief rescue services",
                ],
            },
            {
                "role": "RPIC",
                "steps": [
                    "6. REPORT THE ACCIDENT: notify the federal accident investigation authority without delay for accidents or serious incidents, damage to property, serious or fatal injury",
                ],
            },
        ],
    },
    {
        "id": "ERP-FA",
        "title": "Response plan for a UAS fly-away",
        "short_title": "ERP fly-away",
        "category": "erp",
        "description": "The UAS keeps flying despite termination. Immediate reports to ATM, tower and police are required.",
        "general_notes": [
            "ATM provider: air navigation service, regional unit. Keep the phone number at hand.",
            "For operations near an airfield or airport: find out the tower name and phone number before the mission starts",
        ],
        "actions": [
            {
                "role": "RPIC",
                "steps": [
                    "1. ON C2 LINK PROBLEMS: retry the connection several times, move the remote controller or ground antenna (if possible)",
                ],
            },
            {
                "role": "RPIC",
                "steps": [
                    "2. REPORT TO AIRPORT/AIRFIELD: phone the tower about the fly-away. Who is calling? Where? What happened? UAS size/configuration, last heading, max. endurance, max. altitude. Wait for questions!",
                ],
            },
            {
                "role": "RPIC",
                "steps": [
                    "3. REPORT TO ATM PROVIDER: phone the air navigation service. Who is calling? Where? What happened? UAS size/configuration, last heading, max. endurance, max. altitude. Wait for questions!",
                ],
            },
            {
                "role": "RPIC",
                "steps": [
                    "4. INFORM THE POLICE: report the fly-away by phone and warn of a possible crash. Who is calling? Where? What happened? Wait for questions!",
                ],
            },
        ],
    },
]
